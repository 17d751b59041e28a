"""
API v1 routes.
"""

from fastapi import APIRouter

from src.api.v1 import groups, articles, search

router = APIRouter()

router.include_router(groups.router, prefix="/groups", tags=["Groups"])
router.include_router(articles.router, prefix="/articles", tags=["Articles"])
router.include_router(search.router, tags=["Search"])
