"""
Named routes with reverse lookup.

A Router holds an ordered table of routes. Each route ties an HTTP verb and
a path pattern such as ``/posts/:id`` to a Django view, under an optional
name. The name is what templates and views use to build links:

    router.path_for('post', post)        ->  '/posts/42'
    router.url_for('post', post, host=h) ->  'http://h/posts/42'

so no view ever glues ``'/posts/' + str(post.id)`` together by hand.

The same table produces the Django ``urlpatterns`` that dispatch requests,
which keeps forward routing and reverse lookup from drifting apart.
"""

import logging
import re
from collections.abc import Mapping
from urllib.parse import quote, urlencode

from django.conf import settings
from django.http import HttpResponseNotAllowed
from django.urls import path as django_path

from .errors import (
    DuplicateRoute,
    MissingHost,
    MissingParameter,
    RoutingError,
    UnexpectedParameter,
    UnknownRoute,
)
from .inflection import pluralize, singularize

logger = logging.getLogger(__name__)

VERBS = ('GET', 'POST', 'PUT', 'PATCH', 'DELETE')

PLACEHOLDER_RE = re.compile(r':([A-Za-z_]\w*)')

# Conventional resource routes, in the order they must be matched:
# /posts/new has to be tried before /posts/:id.
# (action, verb, suffix, name kind)
RESOURCE_ROUTES = (
    ('index',   'GET',    '',          'plural'),
    ('create',  'POST',   '',          None),
    ('new',     'GET',    '/new',      'new'),
    ('edit',    'GET',    '/:id/edit', 'edit'),
    ('show',    'GET',    '/:id',      'singular'),
    ('update',  'PATCH',  '/:id',      None),
    ('update',  'PUT',    '/:id',      None),
    ('destroy', 'DELETE', '/:id',      None),
)
RESOURCE_ACTIONS = ('index', 'new', 'create', 'show', 'edit', 'update', 'destroy')


def normalize_pattern(pattern):
    """Return pattern with exactly one leading slash and no trailing slash."""
    return '/' + pattern.strip('/')


def to_param(value):
    """
    Return the URL segment for a parameter value, or None if it has none.

    Model instances and other records are reduced to their identifier:
    ``to_param()`` if the object defines it, else ``pk``, else ``id``.
    Scalars are used as-is.
    """
    to_param_method = getattr(value, 'to_param', None)
    if callable(to_param_method):
        value = to_param_method()
    elif hasattr(value, 'pk'):
        value = value.pk
    elif hasattr(value, 'id'):
        value = value.id

    if value is None:
        return None
    text = str(value)
    return text or None


class Route:
    """A single verb + pattern -> handler mapping."""

    def __init__(self, verb, pattern, handler, name=None, action=None):
        verb = verb.upper()
        if verb not in VERBS:
            raise RoutingError(f'Unsupported HTTP verb "{verb}".')
        self.verb = verb
        self.pattern = normalize_pattern(pattern)
        self.handler = handler
        self.name = name
        self.action = action or getattr(handler, '__qualname__', repr(handler))
        self.placeholders = tuple(PLACEHOLDER_RE.findall(self.pattern))

    def __repr__(self):
        return f'<Route {self.verb} {self.pattern} name={self.name!r}>'

    @property
    def django_route(self):
        """The pattern in django.urls.path() syntax: 'posts/<str:id>'."""
        return PLACEHOLDER_RE.sub(r'<str:\1>', self.pattern.lstrip('/'))

    def render(self, values):
        """Fill every placeholder from ``values`` (already stringified)."""
        return PLACEHOLDER_RE.sub(
            lambda match: quote(values[match.group(1)], safe=''),
            self.pattern,
        )


def default_route_name(pattern):
    """
    Derive a route name from the static segments of a pattern.

    '/users/new' -> 'users_new', '/register' -> 'register', '/' -> 'root'.
    Patterns made only of placeholders get no name.
    """
    segments = [s for s in pattern.strip('/').split('/') if s]
    if not segments:
        return 'root'
    static = [s.replace('-', '_') for s in segments if not s.startswith(':')]
    return '_'.join(static) or None


def _dispatcher(pattern, handlers):
    """Build the Django view that picks a handler by request method."""
    verbs = set(handlers)
    if 'GET' in verbs:
        verbs.add('HEAD')
    allowed = sorted(verbs)

    def dispatch(request, **kwargs):
        method = request.method
        if method == 'HEAD' and 'HEAD' not in handlers:
            method = 'GET'
        handler = handlers.get(method)
        if handler is None:
            logger.warning('Method %s not allowed for %s', request.method, pattern)
            return HttpResponseNotAllowed(allowed)
        return handler(request, **kwargs)

    dispatch.__name__ = 'dispatch_' + (default_route_name(pattern) or 'route')
    return dispatch


class Router:
    """
    Ordered route table with reverse lookup.

    Routes are matched in registration order. Names are unique: an explicit
    name (``name=`` or ``as_=``) that is already taken raises DuplicateRoute,
    while an auto-generated name that is already taken is simply dropped.
    """

    def __init__(self):
        self._routes = []
        self._named = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, verb, pattern, handler, name=None, as_=None, action=None):
        """
        Register a route and return it.

        ``as_`` replaces the generated name; the generated one is then not
        registered at all. ``name`` is a synonym kept for readability when no
        aliasing is meant.
        """
        explicit = as_ if as_ is not None else name
        if explicit is not None:
            if explicit in self._named:
                raise DuplicateRoute(explicit)
            route_name = explicit
        else:
            route_name = default_route_name(normalize_pattern(pattern))
            if route_name in self._named:
                route_name = None
        return self._register(Route(verb, pattern, handler, name=route_name, action=action))

    def get(self, pattern, handler, **options):
        return self.add('GET', pattern, handler, **options)

    def post(self, pattern, handler, **options):
        return self.add('POST', pattern, handler, **options)

    def put(self, pattern, handler, **options):
        return self.add('PUT', pattern, handler, **options)

    def patch(self, pattern, handler, **options):
        return self.add('PATCH', pattern, handler, **options)

    def delete(self, pattern, handler, **options):
        return self.add('DELETE', pattern, handler, **options)

    def resources(self, plural, views, only=None, except_=None, as_=None, path=None):
        """
        Register the conventional routes for a resource.

        ``views`` supplies one handler per action, either as a mapping or as
        an object (typically a views module) with attributes named after the
        actions. Actions it does not provide are skipped, unless they were
        asked for explicitly with ``only``.

        Names follow the resource: ``posts`` (index), ``post`` (show),
        ``new_post`` and ``edit_post``. ``as_`` renames them without
        changing the path and may be given in either number ('articles' or
        'article'); ``path`` changes the path without renaming.
        """
        actions = set(only) if only is not None else set(RESOURCE_ACTIONS)
        if except_ is not None:
            actions -= set(except_)
        unknown = actions - set(RESOURCE_ACTIONS)
        if unknown:
            raise RoutingError(f'Unknown resource action(s): {", ".join(sorted(unknown))}.')

        base_name = as_ or plural
        singular = singularize(base_name)
        if singular == base_name:
            # as_='article' is taken as the singular of 'articles'
            base_name = pluralize(singular)
        names = {
            'plural': base_name,
            'singular': singular,
            'new': 'new_' + singular,
            'edit': 'edit_' + singular,
        }
        prefix = normalize_pattern(path or plural)

        registered = []
        for action, verb, suffix, name_kind in RESOURCE_ROUTES:
            if action not in actions:
                continue
            handler = _lookup_handler(views, action)
            if handler is None:
                if only is not None:
                    raise RoutingError(f'Resource "{plural}" has no handler for "{action}".')
                continue
            route_name = names[name_kind] if name_kind else None
            if route_name is not None and route_name in self._named:
                raise DuplicateRoute(route_name)
            route = Route(verb, prefix + suffix, handler, name=route_name, action=f'{plural}#{action}')
            registered.append(self._register(route))
        return registered

    def _register(self, route):
        self._routes.append(route)
        if route.name is not None:
            self._named[route.name] = route
        logger.debug('Registered %s %s as %s', route.verb, route.pattern, route.name or '(unnamed)')
        return route

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def routes(self):
        return tuple(self._routes)

    def __iter__(self):
        return iter(self._routes)

    def __len__(self):
        return len(self._routes)

    def __contains__(self, name):
        return name in self._named

    def route(self, name):
        """Return the route registered under ``name``."""
        try:
            return self._named[name]
        except KeyError:
            raise UnknownRoute(name) from None

    def path_for(self, name, params=None, /, query=None, **kwargs):
        """
        Reverse a route name into a relative path.

        ``params`` may be a mapping of placeholder name to value, a sequence
        filling placeholders in order, or a single value (or record) for the
        first placeholder. Keyword arguments are merged into the mapping.
        ``query`` is urlencoded onto the end, unless the pattern itself has a
        ``:query`` placeholder, which it then fills.

        Raises UnknownRoute, MissingParameter or UnexpectedParameter.
        """
        route = self.route(name)
        query = _claim_placeholders(route, kwargs, query=query)['query']
        path = route.render(self._bind(route, params, kwargs))
        if query:
            path = f'{path}?{urlencode(query, doseq=True)}'
        return path

    def url_for(self, name, params=None, /, host=None, scheme=None, query=None, **kwargs):
        """
        Reverse a route name into an absolute URL.

        ``host`` defaults to the ROUTING_DEFAULT_HOST setting and ``scheme``
        to http. As with ``query``, a pattern placeholder called ``host`` or
        ``scheme`` takes the keyword for itself.
        """
        options = _claim_placeholders(self.route(name), kwargs, host=host, scheme=scheme)
        path = self.path_for(name, params, query=query, **kwargs)
        host = options['host']
        if not host and settings.configured:
            host = getattr(settings, 'ROUTING_DEFAULT_HOST', '')
        if not host:
            raise MissingHost(name)
        return f'{options["scheme"] or "http"}://{host}{path}'

    def _bind(self, route, params, kwargs):
        """Map placeholder names to URL-ready strings."""
        if params is None:
            supplied = {}
        elif isinstance(params, Mapping):
            supplied = dict(params)
        elif isinstance(params, (list, tuple)):
            if len(params) > len(route.placeholders):
                extra = [f'#{i}' for i in range(len(route.placeholders), len(params))]
                raise UnexpectedParameter(route.name, extra, route.pattern)
            supplied = dict(zip(route.placeholders, params))
        else:
            if not route.placeholders:
                raise UnexpectedParameter(route.name, ['#0'], route.pattern)
            supplied = {route.placeholders[0]: params}
        supplied.update(kwargs)

        extra = set(supplied) - set(route.placeholders)
        if extra:
            raise UnexpectedParameter(route.name, extra, route.pattern)

        values = {}
        for placeholder in route.placeholders:
            value = to_param(supplied.get(placeholder))
            if value is None:
                raise MissingParameter(route.name, placeholder, route.pattern)
            values[placeholder] = value
        return values

    # ------------------------------------------------------------------
    # Django integration
    # ------------------------------------------------------------------

    @property
    def urlpatterns(self):
        """
        Django URL patterns for the table, one per distinct path pattern.

        Each pattern is named after the first named route on it, so
        ``{% url 'post' id=1 %}`` agrees with ``path_for('post', 1)``.
        """
        groups = {}
        for route in self._routes:
            group = groups.setdefault(route.pattern, {'route': route, 'handlers': {}, 'name': None})
            group['handlers'].setdefault(route.verb, route.handler)
            if group['name'] is None:
                group['name'] = route.name
        return [
            django_path(
                group['route'].django_route,
                _dispatcher(pattern, group['handlers']),
                name=group['name'],
            )
            for pattern, group in groups.items()
        ]


def _claim_placeholders(route, kwargs, **options):
    """
    Move helper options that share a name with a placeholder into kwargs.

    Returns the options left for the helper; claimed ones become None.
    """
    remaining = {}
    for option, value in options.items():
        if value is not None and option in route.placeholders and option not in kwargs:
            kwargs[option] = value
            value = None
        remaining[option] = value
    return remaining


def _lookup_handler(views, action):
    if isinstance(views, Mapping):
        return views.get(action)
    return getattr(views, action, None)
