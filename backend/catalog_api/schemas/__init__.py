"""
Catalog API — Pydantic Request/Response Schemas
=================================================

Input schemas validate request bodies (and produce the 400 field-error
list on failure); output schemas are explicit projections of ORM records,
so a column only reaches a client if a response schema names it.
"""
