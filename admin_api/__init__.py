"""
Administrative API for the blog.

The admin API is a small Flask application that lets the single
administrator log in and manage posts, comments, and images. Authentication
is stateless: ``POST /login`` exchanges the administrator's username and
password for a signed token (see :mod:`admin_api.auth.tokens`), which must be
presented as a bearer token on every other request.

Requests pass through the access gate (:mod:`admin_api.auth.middleware`),
which rejects any request to a protected path that lacks a valid token,
and then through the router (:mod:`admin_api.routing`), which matches the
method and path against the route table in :mod:`admin_api.routes` and calls
the handler with the extracted path parameters and the caller's claims.
"""
