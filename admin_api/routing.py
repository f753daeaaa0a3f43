"""
Pattern-based request routing.

A route pattern is a sequence of ``/``-separated segments. A segment that
starts with ``:`` captures exactly one path segment under that name; any
other segment must match literally (and case-sensitively). There are no
wildcards, so a route only ever matches paths with the same number of
segments.

Routes are tried in the order they were registered and the first full match
wins. The table is fixed when the :class:`Router` is created.

.. code-block:: python

   router = Router([
       ('GET', '/admin/posts/:postId', get_post),
   ])
   router.match('GET', '/admin/posts/42')
   # RouteMatch(handler=get_post, params={'postId': '42'})

"""

from typing import Any, Callable, Dict, Iterable, List, NamedTuple, \
    Optional, Tuple
from urllib.parse import unquote

from werkzeug.exceptions import NotFound

from .logging import getLogger

logger = getLogger(__name__)

Handler = Callable[..., Any]


def split_path(path: str) -> List[str]:
    """Split a path into segments, ignoring empty ones."""
    return [segment for segment in path.split('/') if segment]


class Route(NamedTuple):
    """A single entry in the route table."""

    method: str
    pattern: str
    handler: Handler

    @property
    def segments(self) -> List[str]:
        """The pattern, split into segments."""
        return split_path(self.pattern)

    def __str__(self) -> str:
        return f'{self.method} {self.pattern}'


class RouteMatch(NamedTuple):
    """The handler for a request, and the values of its path parameters."""

    handler: Handler
    params: Dict[str, str]


def match_pattern(pattern: List[str], path: List[str]) \
        -> Optional[Dict[str, str]]:
    """
    Match path segments against pattern segments.

    Returns
    -------
    dict or None
        Percent-decoded parameter values, keyed by name; ``None`` if the
        path does not match.

    """
    if len(pattern) != len(path):
        return None
    params: Dict[str, str] = {}
    for expected, actual in zip(pattern, path):
        if expected.startswith(':'):
            params[expected[1:]] = unquote(actual)
        elif expected != actual:
            return None
    return params


class Router(object):
    """Immutable route table with first-match-wins dispatch."""

    def __init__(self, routes: Iterable[Tuple[str, str, Handler]]) -> None:
        """
        Build the route table.

        Parameters
        ----------
        routes : iterable
            ``(method, pattern, handler)`` tuples, in priority order.

        Raises
        ------
        :class:`ValueError`
            Raised if the same method and pattern are registered twice.

        """
        table: List[Route] = []
        seen = set()
        for method, pattern, handler in routes:
            route = Route(method.upper(), pattern, handler)
            key = (route.method, tuple(route.segments))
            if key in seen:
                raise ValueError(f'Route registered more than once: {route}')
            seen.add(key)
            table.append(route)
        self._table: Tuple[Route, ...] = tuple(table)
        # Segment lists are computed once; the table never changes.
        self._compiled = tuple((route, route.segments) for route in table)

    @property
    def routes(self) -> List[str]:
        """Registered routes as ``METHOD /pattern`` strings."""
        return [str(route) for route in self._table]

    def match(self, method: str, path: str) -> Optional[RouteMatch]:
        """Find the first route matching ``method`` and ``path``."""
        segments = split_path(path)
        for route, pattern in self._compiled:
            if route.method != method or len(pattern) != len(segments):
                continue
            params = match_pattern(pattern, segments)
            if params is not None:
                return RouteMatch(route.handler, params)
        return None

    def dispatch(self, request: Any, env: Any, ctx: Any, method: str,
                 path: str, caller: Any = None) -> Any:
        """
        Call the handler for ``method`` and ``path``.

        The handler is called as ``handler(request, env, ctx, params,
        caller)`` and its return value is passed back unchanged.

        Raises
        ------
        :class:`.NotFound`
            Raised if no route matches.

        """
        found = self.match(method, path)
        if found is None:
            logger.warning('Route not found',
                           extra={'method': method, 'path': path})
            raise NotFound('Not Found')
        logger.debug('Route matched', extra={
            'handler': getattr(found.handler, '__name__', repr(found.handler)),
            'params': found.params
        })
        return found.handler(request, env, ctx, found.params, caller)
