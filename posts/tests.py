"""
Tests for the posts app.

Covers:
- Navigating to a post's show page (status, H1 title, P description)
- The index page linking each title to its show page via path_for
- resource_links laziness and its use of the router
- The create/list store in creation order
- Edge cases: unknown and non-numeric ids
- The seed_posts command
"""

import inspect
from io import StringIO
from types import SimpleNamespace

from django.core.management import call_command
from django.test import Client, SimpleTestCase, TestCase, override_settings

from routing import path_for
from routing.errors import MissingParameter
from routing.router import Router

from . import store
from .links import ResourceLink, resource_links
from .models import Post

# Plain static files storage in tests; WhiteNoise's manifest storage needs
# `collectstatic` to have run first.
_TEST_STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}


@override_settings(STORAGES=_TEST_STORAGES)
class NavigateTest(TestCase):
    """Visiting a single post."""

    def setUp(self):
        self.client = Client()
        self.post = store.create(title='My Post', description='My post desc')

    def test_show_page_status(self):
        response = self.client.get(f'/posts/{self.post.id}')
        self.assertEqual(response.status_code, 200)

    def test_title_in_h1(self):
        response = self.client.get(f'/posts/{self.post.id}')
        self.assertContains(response, '<h1>My Post</h1>', html=True)

    def test_description_in_p(self):
        response = self.client.get(f'/posts/{self.post.id}')
        self.assertContains(response, '<p>My post desc</p>', html=True)

    def test_show_page_via_path_for(self):
        response = self.client.get(path_for('post', self.post))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'posts/show.html')
        self.assertEqual(response.context['post'], self.post)

    def test_back_link_and_canonical(self):
        response = self.client.get(path_for('post', self.post))
        self.assertContains(response, '<a class="back" href="/posts">All posts</a>', html=True)
        self.assertContains(response, f'href="http://testserver/posts/{self.post.id}"')

    def test_unknown_id_is_404(self):
        response = self.client.get(f'/posts/{self.post.id + 1000}')
        self.assertEqual(response.status_code, 404)

    def test_non_numeric_id_is_404(self):
        response = self.client.get('/posts/not-a-number')
        self.assertEqual(response.status_code, 404)


@override_settings(STORAGES=_TEST_STORAGES)
class IndexPageTest(TestCase):
    """The list of posts."""

    def setUp(self):
        self.client = Client()

    def test_links_to_post_page(self):
        """The second post's title links to path_for('post', second_post)."""
        store.create(title='My Post', description='My post desc')
        second_post = store.create(title='My Title', description='My post description')
        response = self.client.get(path_for('posts'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(
            response,
            f'<a href="{path_for("post", second_post)}">{second_post.title}</a>',
            html=True,
        )
        self.assertContains(response, f'href="/posts/{second_post.id}"')

    def test_lists_in_creation_order(self):
        for title in ('First', 'Second', 'Third'):
            store.create(title=title, description='...')
        response = self.client.get('/posts')
        self.assertEqual([p.title for p in response.context['posts']], ['First', 'Second', 'Third'])

    def test_empty(self):
        response = self.client.get('/posts')
        self.assertContains(response, 'No posts yet.')

    def test_root_shows_index(self):
        store.create(title='On the front page', description='...')
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'On the front page')

    def test_title_is_escaped(self):
        post = store.create(title='<script>x</script>', description='...')
        response = self.client.get('/posts')
        self.assertNotContains(response, '<script>x</script>')
        self.assertContains(response, f'href="/posts/{post.id}"')


class ResourceLinksTest(SimpleTestCase):
    """resource_links against a standalone router."""

    def setUp(self):
        self.router = Router()
        self.router.get('/posts/:id', lambda request, id: None, as_='post')
        self.router.get('/articles/:slug', lambda request, slug: None, as_='article')

    def test_pairs(self):
        records = [SimpleNamespace(id=1, title='One'), SimpleNamespace(id=2, title='Two')]
        links = list(resource_links(records, router=self.router))
        self.assertEqual(links, [ResourceLink('One', '/posts/1'), ResourceLink('Two', '/posts/2')])
        self.assertEqual(links[0].text, 'One')
        self.assertEqual(links[0].href, '/posts/1')

    def test_other_route(self):
        record = SimpleNamespace(id=1, to_param=lambda: 'hello', title='Hello')
        links = list(resource_links([record], route='article', router=self.router))
        self.assertEqual(links, [ResourceLink('Hello', '/articles/hello')])

    def test_lazy(self):
        """Nothing is reversed until the links are iterated."""
        links = resource_links([SimpleNamespace(id=None, title='Unsaved')], router=self.router)
        self.assertTrue(inspect.isgenerator(links))
        with self.assertRaises(MissingParameter):
            next(links)

    def test_empty(self):
        self.assertEqual(list(resource_links([], router=self.router)), [])


class StoreTest(TestCase):
    """posts.store create/all."""

    def test_create_assigns_identifier(self):
        post = store.create(title='A', description='a')
        self.assertIsNotNone(post.pk)
        self.assertEqual(Post.objects.get(pk=post.pk).title, 'A')

    def test_identifiers_are_unique(self):
        first = store.create(title='A', description='a')
        second = store.create(title='B', description='b')
        self.assertNotEqual(first.pk, second.pk)

    def test_all_in_creation_order(self):
        titles = ['Zebra', 'Apple', 'Mango']
        for title in titles:
            store.create(title=title, description='...')
        self.assertEqual([p.title for p in store.all()], titles)


class PostModelTest(TestCase):

    def test_str(self):
        self.assertEqual(str(Post(title='Hello')), 'Hello')

    def test_get_absolute_url(self):
        post = Post.objects.create(title='Hello', description='...')
        self.assertEqual(post.get_absolute_url(), f'/posts/{post.pk}')

    def test_unsaved_post_has_no_path(self):
        with self.assertRaises(MissingParameter):
            Post(title='Draft').get_absolute_url()


class SeedPostsCommandTest(TestCase):

    def test_idempotent(self):
        call_command('seed_posts', stdout=StringIO())
        count = Post.objects.count()
        self.assertGreater(count, 0)
        out = StringIO()
        call_command('seed_posts', stdout=out)
        self.assertEqual(Post.objects.count(), count)
        self.assertIn('0 post(s) created', out.getvalue())
