"""
Route helpers for the project.

``path_for`` and ``url_for`` reverse a route name against the project
router, which is located through the ROUTING_ROUTER setting.
"""

from django.conf import settings
from django.utils.module_loading import import_string

DEFAULT_ROUTER = 'signpost.routes.router'


def get_router():
    """Return the project Router named by settings.ROUTING_ROUTER."""
    return import_string(getattr(settings, 'ROUTING_ROUTER', DEFAULT_ROUTER))


def path_for(name, params=None, /, **kwargs):
    """Relative path for a named route, e.g. path_for('post', post)."""
    return get_router().path_for(name, params, **kwargs)


def url_for(name, params=None, /, **kwargs):
    """Absolute URL for a named route, e.g. url_for('post', post, host='example.com')."""
    return get_router().url_for(name, params, **kwargs)
