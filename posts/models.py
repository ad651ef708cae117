"""
Models for the posts app.

A Post is the single resource of the site: a title and a description,
listed on /posts and shown on /posts/:id.
"""

from django.db import models

from routing import path_for


class Post(models.Model):
    """A post with a headline and a short body."""

    title = models.CharField(max_length=200, help_text='Headline, also used as the H1 and the link text.')
    description = models.TextField(help_text='Body text shown under the headline.')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.title

    def to_param(self):
        """URL segment for this post; None until it has been saved."""
        return None if self.pk is None else str(self.pk)

    def get_absolute_url(self):
        """Return the canonical path for this post."""
        return path_for('post', self)
