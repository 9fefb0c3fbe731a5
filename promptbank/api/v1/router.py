"""
Router assembly for API v1.
"""

from fastapi import APIRouter

from promptbank.api.v1.endpoints import imports

api_router = APIRouter()
api_router.include_router(imports.router, prefix="/imports", tags=["imports"])
