"""
Service layer.

The store, the warehouse client and the query resolver live here so
that API handlers stay thin translators between HTTP and domain calls.
"""
