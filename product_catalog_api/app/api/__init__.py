"""
API package containing versioned routes.

A version subpackage exposes a top‑level ``router`` which includes
the REST product endpoints, the query endpoint and the service info
endpoint.
"""
