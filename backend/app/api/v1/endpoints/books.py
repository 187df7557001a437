# backend/app/api/v1/endpoints/books.py
"""
Endpoint de solo lectura del catálogo de libros.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from app.api import deps
from app.core.exceptions import ServiceError
from app.schemas.book_schema import BookResponse
from app.services.book_service import BookService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[BookResponse])
def read_books(book_service: BookService = Depends(deps.get_book_service)) -> List[BookResponse]:
    """Devuelve todos los libros del catálogo con el género como un único texto."""
    try:
        return book_service.list_books()
    except Exception as e:
        logger.exception("❌ ERROR: Error fetching books")
        raise ServiceError("Failed to fetch books") from e
