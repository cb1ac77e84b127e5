"""
Words API — Words Route Handlers
==================================

What:  Handles GET /words (list) and POST /words (add).
How:   Delegates to WordService, returns JSON with the right status code.

Neither endpoint paginates, filters or validates beyond body shape.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.word import (
    ErrorResponse,
    WordCreate,
    WordCreatedResponse,
    WordResponse,
)
from app.services.word_service import word_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Words"])


@router.get(
    "/words",
    response_model=List[WordResponse],
    responses={
        200: {"description": "All words, in storage order"},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="List all words",
)
async def list_words(
    db: AsyncSession = Depends(get_db_session),
) -> List[WordResponse]:
    """
    Return every stored word.

    Order is whatever the database returns and may differ between calls.
    An empty table gives 200 with [].
    """
    return await word_service.list_words(db)


@router.post(
    "/words",
    status_code=201,
    response_model=WordCreatedResponse,
    responses={
        201: {"description": "Word stored", "model": WordCreatedResponse},
        500: {"description": "Database error, including a missing field", "model": ErrorResponse},
    },
    summary="Add a word",
)
async def add_word(
    payload: WordCreate,
    db: AsyncSession = Depends(get_db_session),
) -> WordCreatedResponse:
    return await word_service.add_word(db, payload)
