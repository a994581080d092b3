"""
FastAPI routers grouped by collection (posts, comments).

Each module exposes an APIRouter that is included in the main application
(app.py). The endpoints share one factory in `collections.py`.
"""
