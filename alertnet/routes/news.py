"""
News feed endpoints for the home page.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from alertnet.models.base import NewsArticle
from alertnet.models.report import DisasterType
from alertnet.services.app_state import AppState, get_app_state

router = APIRouter(prefix="/news", tags=["News"])


@router.get("", response_model=List[NewsArticle])
async def list_news(
    disaster_type: Optional[DisasterType] = Query(None, description="Only articles tagged with this type"),
    state: AppState = Depends(get_app_state),
):
    return state.news.articles(disaster_type)


@router.get("/{article_id}", response_model=NewsArticle)
async def get_article(article_id: str, state: AppState = Depends(get_app_state)):
    article = state.news.get(article_id)
    if article is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Article {article_id} not found"
        )
    return article
