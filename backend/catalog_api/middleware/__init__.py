# Middleware package init
"""
Catalog API — Middleware Package
==================================

Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Rate Limit first: reject abusive clients before any work
    2. Request ID: correlation id for logs and the X-Request-ID header
    3. Logging: one access line per request, tagged with the request id

The bearer-token guard is not middleware: it is a route dependency
(catalog_api.dependencies.require_token) so public routes need no
exclusion list.
"""
