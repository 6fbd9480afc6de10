# Routes package init
"""
Catalog API — API Routes Package
==================================

Route Inventory:
    - health.py:     GET  /ping, GET /health                 (public)
    - auth.py:       POST /auth/login                         (public)
                     POST /auth/register                      (bearer)
    - categories.py: GET  /category, GET /category/{id},
                     POST /category                           (bearer)
    - products.py:   GET  /product, GET /product/{id},
                     POST /product, PATCH /product/{id},
                     DELETE /product/{id}                     (bearer)

Routes are thin: extract input, call a service, pick the status code.
"""
