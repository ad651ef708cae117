"""
Template tags for building links from route names.

    {% load routes %}
    <a href="{% path_for 'post' post %}">{{ post.title }}</a>
    <link rel="canonical" href="{% url_for 'post' post %}">

Both tags accept keyword parameters and ``as var``.
"""

from django import template

import routing

register = template.Library()


def _params(args):
    """One positional argument is passed through; several become a list."""
    if not args:
        return None
    if len(args) == 1:
        return args[0]
    return list(args)


@register.simple_tag
def path_for(name, /, *args, **kwargs):
    """Relative path for a named route."""
    return routing.path_for(name, _params(args), **kwargs)


@register.simple_tag(takes_context=True)
def url_for(context, name, /, *args, **kwargs):
    """
    Absolute URL for a named route.

    With no ``host`` or ``scheme`` given, the current request supplies both.
    Either one given explicitly wins over the request; whatever is still
    missing comes from the request, or from ROUTING_DEFAULT_HOST and http
    when there is no request.
    """
    request = context.get('request')
    host = kwargs.pop('host', None)
    scheme = kwargs.pop('scheme', None)
    params = _params(args)
    if request is not None:
        if host is None and scheme is None:
            return request.build_absolute_uri(routing.path_for(name, params, **kwargs))
        host = host or request.get_host()
        scheme = scheme or request.scheme
    return routing.url_for(name, params, host=host, scheme=scheme, **kwargs)
