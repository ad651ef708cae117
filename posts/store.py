"""
Create-and-list access to posts, as used by fixtures and seed data.

Nothing here updates or deletes a post.
"""

from .models import Post


def create(**attributes):
    """Create, save and return a Post with a fresh identifier."""
    return Post.objects.create(**attributes)


def all():  # noqa: A001
    """Every post, oldest first."""
    return Post.objects.order_by('created_at', 'id')
