# Services package init
"""
Catalog API — Services Layer
==============================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services take the request's AsyncSession as an argument, run the
       existence/uniqueness checks, perform the write, and return response
       schemas. They raise exceptions from catalog_api.exceptions and never
       build HTTP responses themselves.

Service Inventory:
    - CategoryService: list / get / create categories
    - ProductService:  list / get / create / update / delete products
    - UserService:     register users, authenticate and issue tokens
    - identifiers:     id parsing and deduplication helpers
"""
