"""
Endpoint subpackage for API v1.

Each module in this package defines an APIRouter for one surface
(REST products, query graph, service info).  The routers are
aggregated in ``router.py`` at the package level.
"""
