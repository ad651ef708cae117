"""
Tests for the routing app.

Covers:
- Router.path_for (placeholders, object shorthand, encoding, query strings)
- The two lookup failures: unknown route and missing parameter
- Naming rules: generated names, as_ aliases, duplicates
- resources() naming with only / except_ / as_
- url_for and ROUTING_DEFAULT_HOST
- Method dispatch through the generated urlpatterns (405, HEAD)
- The {% path_for %} / {% url_for %} template tags
- The `routes` management command
"""

from io import StringIO
from types import SimpleNamespace

from django.core.management import call_command
from django.http import HttpResponse
from django.template import Context, Template
from django.test import RequestFactory, SimpleTestCase, TestCase, override_settings
from django.urls import reverse

import routing
from routing.errors import (
    DuplicateRoute,
    MissingHost,
    MissingParameter,
    RoutingError,
    UnexpectedParameter,
    UnknownRoute,
)
from routing.inflection import pluralize, singularize
from routing.router import Route, Router, default_route_name, to_param


def _handler(request, **kwargs):
    return HttpResponse('ok')


def _show(request, id):
    return HttpResponse(f'show {id}')


def _destroy(request, id):
    return HttpResponse(f'destroy {id}')


# Swapped in through ROUTING_ROUTER for the template tag tests.
TAG_ROUTER = Router()
TAG_ROUTER.get('/users/:name', _handler, as_='user')
TAG_ROUTER.get('/posts/:id', _show, as_='post')


class PathForTest(SimpleTestCase):
    """Reverse lookup of a single named route."""

    def setUp(self):
        self.router = Router()
        self.router.get('/posts/:id', _handler, as_='show')
        self.router.get('/posts', _handler, as_='index')

    def test_substitutes_placeholder(self):
        """pathFor('show', {id: 42}) on /posts/:id is /posts/42."""
        self.assertEqual(self.router.path_for('show', {'id': 42}), '/posts/42')

    def test_keyword_params(self):
        self.assertEqual(self.router.path_for('show', id=7), '/posts/7')

    def test_single_value_fills_only_placeholder(self):
        self.assertEqual(self.router.path_for('show', 42), '/posts/42')

    def test_no_placeholders(self):
        self.assertEqual(self.router.path_for('index'), '/posts')

    def test_missing_parameter(self):
        """An empty mapping leaves :id unfilled."""
        with self.assertRaises(MissingParameter) as ctx:
            self.router.path_for('show', {})
        self.assertEqual(ctx.exception.placeholder, 'id')
        self.assertEqual(ctx.exception.pattern, '/posts/:id')

    def test_none_counts_as_missing(self):
        with self.assertRaises(MissingParameter):
            self.router.path_for('show', {'id': None})

    def test_unknown_route(self):
        with self.assertRaises(UnknownRoute) as ctx:
            self.router.path_for('nope', {'id': 1})
        self.assertEqual(ctx.exception.name, 'nope')

    def test_unknown_route_is_a_lookup_error(self):
        with self.assertRaises(LookupError):
            self.router.path_for('nope')

    def test_both_errors_share_a_base(self):
        for call in (lambda: self.router.path_for('nope'), lambda: self.router.path_for('show')):
            with self.assertRaises(RoutingError):
                call()

    def test_unexpected_parameter(self):
        """Placeholders must match the supplied names exactly."""
        with self.assertRaises(UnexpectedParameter) as ctx:
            self.router.path_for('show', {'id': 1, 'slug': 'hello'})
        self.assertEqual(ctx.exception.extra, ('slug',))

    def test_value_for_route_without_placeholders(self):
        with self.assertRaises(UnexpectedParameter):
            self.router.path_for('index', 5)

    def test_values_are_url_encoded(self):
        self.router.get('/tags/:name', _handler, as_='tag')
        self.assertEqual(
            self.router.path_for('tag', 'c++ & rust/go'),
            '/tags/c%2B%2B%20%26%20rust%2Fgo',
        )

    def test_query_string(self):
        self.assertEqual(
            self.router.path_for('index', query={'page': 2, 'tag': ['a', 'b']}),
            '/posts?page=2&tag=a&tag=b',
        )

    def test_sequence_fills_placeholders_in_order(self):
        self.router.get('/posts/:post_id/comments/:id', _handler, as_='post_comment')
        self.assertEqual(self.router.path_for('post_comment', [1, 2]), '/posts/1/comments/2')

    def test_too_many_positional_values(self):
        with self.assertRaises(UnexpectedParameter):
            self.router.path_for('show', [1, 2])

    def test_name_placeholder_as_keyword(self):
        """A :name placeholder is filled like any other keyword."""
        self.router.get('/users/:name', _handler, as_='user')
        self.assertEqual(self.router.path_for('user', name='bob'), '/users/bob')

    def test_params_placeholder_as_keyword(self):
        self.router.get('/filters/:params', _handler, as_='filter')
        self.assertEqual(self.router.path_for('filter', params='recent'), '/filters/recent')

    def test_query_placeholder_as_keyword(self):
        """A :query placeholder takes query= instead of the query string."""
        self.router.get('/search/:query', _handler, as_='search')
        self.assertEqual(self.router.path_for('search', query='cats'), '/search/cats')
        self.assertEqual(self.router.path_for('search', {'query': 'dogs'}), '/search/dogs')


class ObjectShorthandTest(SimpleTestCase):
    """Records are reduced to their identifier."""

    def setUp(self):
        self.router = Router()
        self.router.get('/posts/:id', _handler, as_='post')

    def test_object_with_id(self):
        record = SimpleNamespace(id=9, title='Nine')
        self.assertEqual(self.router.path_for('post', record), '/posts/9')

    def test_object_with_pk_inside_mapping(self):
        record = SimpleNamespace(pk=12)
        self.assertEqual(self.router.path_for('post', {'id': record}), '/posts/12')

    def test_to_param_wins(self):
        record = SimpleNamespace(id=3, to_param=lambda: '3-hello-world')
        self.assertEqual(self.router.path_for('post', record), '/posts/3-hello-world')

    def test_unsaved_record_is_missing(self):
        with self.assertRaises(MissingParameter):
            self.router.path_for('post', SimpleNamespace(pk=None))

    def test_to_param_scalars(self):
        self.assertEqual(to_param(0), '0')
        self.assertEqual(to_param('abc'), 'abc')
        self.assertIsNone(to_param(''))
        self.assertIsNone(to_param(None))


class RouteNamingTest(SimpleTestCase):
    """Generated names, aliases and duplicates."""

    def test_default_route_name(self):
        self.assertEqual(default_route_name('/users/new'), 'users_new')
        self.assertEqual(default_route_name('/register'), 'register')
        self.assertEqual(default_route_name('/'), 'root')
        self.assertEqual(default_route_name('/posts/:id/edit'), 'posts_edit')
        self.assertEqual(default_route_name('/sign-in'), 'sign_in')
        self.assertIsNone(default_route_name('/:slug'))

    def test_generated_name(self):
        router = Router()
        router.get('/users/new', _handler)
        self.assertEqual(router.path_for('users_new'), '/users/new')

    def test_alias_replaces_generated_name(self):
        """as_='register' is reachable; the generated users_new is not."""
        router = Router()
        router.get('/users/new', _handler, as_='register')
        self.assertEqual(router.path_for('register', {}), '/users/new')
        self.assertIn('register', router)
        self.assertNotIn('users_new', router)
        with self.assertRaises(UnknownRoute):
            router.path_for('users_new')

    def test_explicit_duplicate_rejected(self):
        router = Router()
        router.get('/a', _handler, as_='thing')
        with self.assertRaises(DuplicateRoute):
            router.get('/b', _handler, as_='thing')

    def test_generated_duplicate_dropped(self):
        router = Router()
        router.get('/register', _handler, as_='register')
        route = router.post('/register', _handler)
        self.assertIsNone(route.name)
        self.assertEqual(len(router), 2)

    def test_pattern_is_normalized(self):
        route = Route('get', 'posts/:id/', _handler)
        self.assertEqual(route.pattern, '/posts/:id')
        self.assertEqual(route.verb, 'GET')
        self.assertEqual(route.placeholders, ('id',))

    def test_unsupported_verb(self):
        with self.assertRaises(RoutingError):
            Route('BREW', '/coffee', _handler)

    def test_django_route(self):
        self.assertEqual(Route('GET', '/posts/:id/edit', _handler).django_route, 'posts/<str:id>/edit')
        self.assertEqual(Route('GET', '/', _handler).django_route, '')


class ResourcesTest(SimpleTestCase):
    """Conventional resource routes."""

    def setUp(self):
        self.views = {action: _handler for action in
                      ('index', 'new', 'create', 'show', 'edit', 'update', 'destroy')}

    def test_full_resource(self):
        router = Router()
        router.resources('posts', self.views)
        self.assertEqual(len(router), 8)
        self.assertEqual(router.path_for('posts'), '/posts')
        self.assertEqual(router.path_for('new_post'), '/posts/new')
        self.assertEqual(router.path_for('post', 5), '/posts/5')
        self.assertEqual(router.path_for('edit_post', 5), '/posts/5/edit')
        verbs = {(r.verb, r.pattern) for r in router}
        self.assertIn(('POST', '/posts'), verbs)
        self.assertIn(('PATCH', '/posts/:id'), verbs)
        self.assertIn(('PUT', '/posts/:id'), verbs)
        self.assertIn(('DELETE', '/posts/:id'), verbs)

    def test_new_is_matched_before_show(self):
        router = Router()
        router.resources('posts', self.views)
        patterns = [r.pattern for r in router]
        self.assertLess(patterns.index('/posts/new'), patterns.index('/posts/:id'))

    def test_only(self):
        router = Router()
        router.resources('posts', self.views, only=['index', 'show'])
        self.assertEqual([r.action for r in router], ['posts#index', 'posts#show'])
        self.assertNotIn('new_post', router)

    def test_except(self):
        router = Router()
        router.resources('posts', self.views, except_=['destroy', 'edit'])
        self.assertNotIn('edit_post', router)
        self.assertFalse(any(r.verb == 'DELETE' for r in router))

    def test_as_renames_but_keeps_path(self):
        router = Router()
        router.resources('posts', self.views, only=['index', 'show'], as_='articles')
        self.assertEqual(router.path_for('articles'), '/posts')
        self.assertEqual(router.path_for('article', 3), '/posts/3')
        self.assertNotIn('post', router)

    def test_singular_as_is_pluralized(self):
        router = Router()
        router.resources('posts', self.views, only=['index', 'show', 'new'], as_='story')
        self.assertEqual(router.path_for('stories'), '/posts')
        self.assertEqual(router.path_for('story', 3), '/posts/3')
        self.assertEqual(router.path_for('new_story'), '/posts/new')

    def test_path_changes_path_but_keeps_names(self):
        router = Router()
        router.resources('posts', self.views, only=['show'], path='/blog')
        self.assertEqual(router.path_for('post', 3), '/blog/3')

    def test_irregular_plural_singularized(self):
        router = Router()
        router.resources('categories', self.views, only=['index', 'show'])
        self.assertEqual(router.path_for('category', 1), '/categories/1')

    def test_views_object(self):
        views = SimpleNamespace(index=_handler)
        router = Router()
        router.resources('posts', views)
        self.assertEqual(len(router), 1)

    def test_only_requires_handler(self):
        with self.assertRaises(RoutingError):
            Router().resources('posts', SimpleNamespace(index=_handler), only=['index', 'show'])

    def test_unknown_action(self):
        with self.assertRaises(RoutingError):
            Router().resources('posts', self.views, only=['archive'])

    def test_resource_name_collision(self):
        router = Router()
        router.get('/posts', _handler, as_='posts')
        with self.assertRaises(DuplicateRoute):
            router.resources('posts', self.views)


class InflectionTest(SimpleTestCase):

    def test_singularize(self):
        self.assertEqual(singularize('posts'), 'post')
        self.assertEqual(singularize('categories'), 'category')
        self.assertEqual(singularize('addresses'), 'address')
        self.assertEqual(singularize('boxes'), 'box')
        self.assertEqual(singularize('boss'), 'boss')

    def test_pluralize(self):
        self.assertEqual(pluralize('post'), 'posts')
        self.assertEqual(pluralize('category'), 'categories')
        self.assertEqual(pluralize('day'), 'days')
        self.assertEqual(pluralize('box'), 'boxes')


class UrlForTest(SimpleTestCase):
    """The *_url flavour of the helpers."""

    def setUp(self):
        self.router = Router()
        self.router.get('/posts/:id', _handler, as_='post')

    def test_explicit_host(self):
        self.assertEqual(
            self.router.url_for('post', 4, host='example.com', scheme='https'),
            'https://example.com/posts/4',
        )

    @override_settings(ROUTING_DEFAULT_HOST='lesson.test')
    def test_default_host_setting(self):
        self.assertEqual(self.router.url_for('post', 4), 'http://lesson.test/posts/4')

    @override_settings(ROUTING_DEFAULT_HOST='')
    def test_no_host(self):
        with self.assertRaises(MissingHost):
            self.router.url_for('post', 4)

    def test_errors_propagate(self):
        with self.assertRaises(MissingParameter):
            self.router.url_for('post', host='example.com')

    def test_name_placeholder_as_keyword(self):
        self.router.get('/users/:name', _handler, as_='user')
        self.assertEqual(
            self.router.url_for('user', name='bob', host='example.com'),
            'http://example.com/users/bob',
        )

    @override_settings(ROUTING_DEFAULT_HOST='lesson.test')
    def test_host_placeholder_as_keyword(self):
        """A :host placeholder takes host= and the default host is used."""
        self.router.get('/servers/:host', _handler, as_='server')
        self.assertEqual(self.router.url_for('server', host='db1'), 'http://lesson.test/servers/db1')


class DispatchTest(SimpleTestCase):
    """The Django view generated for each path pattern."""

    def setUp(self):
        self.factory = RequestFactory()
        router = Router()
        router.get('/posts/:id', _show, as_='post')
        router.delete('/posts/:id', _destroy)
        self.patterns = router.urlpatterns

    def test_one_pattern_per_path(self):
        self.assertEqual(len(self.patterns), 1)
        self.assertEqual(self.patterns[0].name, 'post')

    def test_dispatches_by_method(self):
        view = self.patterns[0].callback
        self.assertEqual(view(self.factory.get('/posts/1'), id='1').content, b'show 1')
        self.assertEqual(view(self.factory.delete('/posts/1'), id='1').content, b'destroy 1')

    def test_head_uses_get_handler(self):
        view = self.patterns[0].callback
        self.assertEqual(view(self.factory.head('/posts/1'), id='1').status_code, 200)

    def test_method_not_allowed(self):
        view = self.patterns[0].callback
        with self.assertLogs('routing.router', level='WARNING'):
            response = view(self.factory.post('/posts/1'), id='1')
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response['Allow'], 'DELETE, GET, HEAD')


_TEST_STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}


@override_settings(STORAGES=_TEST_STORAGES)
class ProjectRoutesTest(TestCase):
    """The project route table in signpost.routes."""

    def test_named_routes(self):
        self.assertEqual(routing.path_for('posts'), '/posts')
        self.assertEqual(routing.path_for('post', 1), '/posts/1')
        self.assertEqual(routing.path_for('register'), '/register')
        self.assertEqual(routing.path_for('root'), '/')

    def test_django_reverse_agrees(self):
        """{% url %} and path_for give the same answer."""
        self.assertEqual(reverse('post', kwargs={'id': 1}), routing.path_for('post', 1))
        self.assertEqual(reverse('posts'), routing.path_for('posts'))
        self.assertEqual(reverse('register'), routing.path_for('register'))

    @override_settings(ROUTING_DEFAULT_HOST='lesson.test')
    def test_module_url_for(self):
        self.assertEqual(routing.url_for('posts'), 'http://lesson.test/posts')

    def test_wrong_verb_is_405(self):
        with self.assertLogs('routing.router', level='WARNING'):
            response = self.client.delete('/posts/1')
        self.assertEqual(response.status_code, 405)

    def test_head_is_served(self):
        self.assertEqual(self.client.head('/posts').status_code, 200)


class TemplateTagTest(SimpleTestCase):
    """{% path_for %} and {% url_for %}."""

    def render(self, source, **context):
        return Template('{% load routes %}' + source).render(Context(context))

    def test_path_for_with_record(self):
        post = SimpleNamespace(pk=5, title='Five')
        self.assertEqual(self.render("{% path_for 'post' post %}", post=post), '/posts/5')

    def test_path_for_keyword(self):
        self.assertEqual(self.render("{% path_for 'post' id=8 %}"), '/posts/8')

    def test_path_for_as_variable(self):
        self.assertEqual(
            self.render("{% path_for 'posts' as href %}<a href=\"{{ href }}\">x</a>"),
            '<a href="/posts">x</a>',
        )

    def test_url_for_uses_request(self):
        request = RequestFactory().get('/')
        self.assertEqual(
            self.render("{% url_for 'post' 3 %}", request=request),
            'http://testserver/posts/3',
        )

    @override_settings(ROUTING_DEFAULT_HOST='lesson.test')
    def test_url_for_without_request(self):
        self.assertEqual(self.render("{% url_for 'posts' %}"), 'http://lesson.test/posts')

    def test_url_for_request_with_explicit_host(self):
        """An explicit host wins over the request's."""
        request = RequestFactory().get('/')
        self.assertEqual(
            self.render("{% url_for 'post' 3 host='example.com' %}", request=request),
            'http://example.com/posts/3',
        )

    def test_url_for_request_with_explicit_scheme(self):
        request = RequestFactory().get('/')
        self.assertEqual(
            self.render("{% url_for 'post' 3 scheme='https' %}", request=request),
            'https://testserver/posts/3',
        )

    def test_url_for_explicit_host_without_request(self):
        self.assertEqual(
            self.render("{% url_for 'post' 3 host='example.com' scheme='https' %}"),
            'https://example.com/posts/3',
        )

    @override_settings(ROUTING_ROUTER='routing.tests.TAG_ROUTER')
    def test_path_for_name_placeholder(self):
        self.assertEqual(self.render("{% path_for 'user' name='bob' %}"), '/users/bob')

    @override_settings(ROUTING_ROUTER='routing.tests.TAG_ROUTER')
    def test_url_for_name_placeholder(self):
        request = RequestFactory().get('/')
        self.assertEqual(
            self.render("{% url_for 'user' name='bob' %}", request=request),
            'http://testserver/users/bob',
        )

    @override_settings(ROUTING_ROUTER='routing.tests.TAG_ROUTER')
    def test_module_helpers_name_placeholder(self):
        self.assertEqual(routing.path_for('user', name='bob'), '/users/bob')
        self.assertEqual(routing.url_for('user', name='bob', host='example.com'), 'http://example.com/users/bob')

    def test_unknown_route_raises(self):
        with self.assertRaises(UnknownRoute):
            self.render("{% path_for 'missing' %}")


class RoutesCommandTest(SimpleTestCase):
    """python manage.py routes"""

    def test_lists_table(self):
        out = StringIO()
        call_command('routes', stdout=out)
        output = out.getvalue()
        self.assertIn('/posts/:id', output)
        self.assertIn('posts#show', output)
        self.assertIn('users#new', output)
        self.assertIn('register', output)

    def test_name_filter(self):
        out = StringIO()
        call_command('routes', name='register', stdout=out)
        output = out.getvalue()
        self.assertIn('/register', output)
        self.assertNotIn('/posts/:id', output)

    def test_no_match(self):
        out = StringIO()
        call_command('routes', name='zzz', stdout=out)
        self.assertIn('No routes match.', out.getvalue())
