"""
Pydantic schema definitions for API payloads.

``product`` holds the product shapes shared by both surfaces;
``query`` holds the query-graph request, its argument variants and the
response envelope.
"""
