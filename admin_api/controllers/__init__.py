"""
Request handlers for the admin API.

Every handler has the signature ``(request, env, ctx, params, caller)``:

- ``request`` is the :class:`flask.Request`;
- ``env`` is the :class:`.domain.Environment` of process-wide bindings;
- ``ctx`` is the :class:`.domain.ExecutionContext` for this request;
- ``params`` are the path parameters extracted by the router;
- ``caller`` is the :class:`.domain.Claims` of the authenticated caller, or
  ``None`` on public routes.

Handlers return ``(data, status, headers)`` and signal errors by raising
:mod:`werkzeug.exceptions`. They never see the raw token.
"""

from typing import Tuple

ResponseData = Tuple[dict, int, dict]
