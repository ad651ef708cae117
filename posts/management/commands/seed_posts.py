"""
Management command to seed a few demo posts:
    python manage.py seed_posts

Safe to re-run: posts are matched on title and only created when missing.
"""

from django.core.management.base import BaseCommand

from posts.models import Post

POSTS = [
    {
        'title': 'Paths, not strings',
        'description': (
            'Build links with path_for("post", post) instead of "/posts/" + id. '
            'When the URL changes, only the route table changes.'
        ),
    },
    {
        'title': 'Path or URL?',
        'description': (
            'path_for gives "/posts/1" for links inside the site. '
            'url_for gives "http://example.com/posts/1" for emails, feeds and redirects to other hosts.'
        ),
    },
    {
        'title': 'Naming a route yourself',
        'description': (
            'router.get("/register", users.new, as_="register") makes path_for("register") '
            'return "/register" whatever the generated name would have been.'
        ),
    },
]


class Command(BaseCommand):
    help = 'Create the demo posts used on the lesson site.'

    def handle(self, *args, **options):
        created_count = 0
        for data in POSTS:
            _, created = Post.objects.get_or_create(
                title=data['title'],
                defaults={'description': data['description']},
            )
            if created:
                created_count += 1
                self.stdout.write(f'  [created] {data["title"]}')
            else:
                self.stdout.write(f'  [exists]  {data["title"]}')

        self.stdout.write(self.style.SUCCESS(f'Done. {created_count} post(s) created.'))
