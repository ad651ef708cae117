"""
Views for the posts resource.

- index: every post, each title linking to its show page
- show:  a single post with its title in an H1 and description in a P

Both are exposed as module attributes named after the resource actions so
the router can pick them up with ``resources('posts', views)``.
"""

from django.http import Http404
from django.views.generic import DetailView, ListView

from . import store
from .links import resource_links
from .models import Post


class PostIndexView(ListView):
    """List of posts in creation order."""

    model = Post
    template_name = 'posts/index.html'
    context_object_name = 'posts'

    def get_queryset(self):
        return store.all()

    def get_context_data(self, **kwargs):
        """Add the (title, href) links for the list."""
        context = super().get_context_data(**kwargs)
        context['links'] = resource_links(context['posts'])
        return context


class PostShowView(DetailView):
    """A single post, looked up by the :id placeholder."""

    model = Post
    template_name = 'posts/show.html'
    context_object_name = 'post'
    pk_url_kwarg = 'id'

    def get_object(self, queryset=None):
        """Treat a non-numeric id like a missing post."""
        try:
            return super().get_object(queryset)
        except ValueError:
            raise Http404(f'No post with id {self.kwargs.get(self.pk_url_kwarg)!r}.')


index = PostIndexView.as_view()
show = PostShowView.as_view()
