"""
Exceptions raised by the router.

All of these signal programmer errors (a typo in a route name, a template
that forgot to pass an id). They are raised immediately and never retried.
"""


class RoutingError(Exception):
    """Base class for every routing failure."""


class UnknownRoute(RoutingError, LookupError):
    """Reverse lookup was asked for a route name that is not registered."""

    def __init__(self, name):
        self.name = name
        super().__init__(f'No route named "{name}".')


class MissingParameter(RoutingError, ValueError):
    """A placeholder in the route pattern has no value."""

    def __init__(self, name, placeholder, pattern):
        self.name = name
        self.placeholder = placeholder
        self.pattern = pattern
        super().__init__(
            f'Route "{name}" ({pattern}) is missing required parameter "{placeholder}".'
        )


class UnexpectedParameter(RoutingError, ValueError):
    """Parameters were supplied that the route pattern does not declare."""

    def __init__(self, name, extra, pattern):
        self.name = name
        self.extra = tuple(sorted(extra))
        self.pattern = pattern
        super().__init__(
            f'Route "{name}" ({pattern}) does not accept parameter(s): {", ".join(self.extra)}.'
        )


class DuplicateRoute(RoutingError, ValueError):
    """Two routes were registered under the same name."""

    def __init__(self, name):
        self.name = name
        super().__init__(f'A route named "{name}" is already registered.')


class MissingHost(RoutingError, ValueError):
    """An absolute URL was requested but no host is known."""

    def __init__(self, name):
        self.name = name
        super().__init__(
            f'Cannot build a URL for "{name}" without a host. '
            'Pass host= or set ROUTING_DEFAULT_HOST.'
        )
