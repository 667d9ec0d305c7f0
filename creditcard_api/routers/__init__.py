"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter that app.py includes.
"""
