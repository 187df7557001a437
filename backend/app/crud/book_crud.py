# backend/app/crud/book_crud.py
"""
Acceso de solo lectura al dataset estático de libros.

El fichero JSON se lee una única vez por ruta y se mantiene en memoria;
cada entrada se valida como ``BookRecord``. Un fichero ausente o mal
formado no se silencia: la excepción sube hasta el endpoint.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from app.schemas.book_schema import BookRecord

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _load_books(data_file: Path) -> tuple:
    with data_file.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"El dataset de libros {data_file} debe ser una lista JSON")
    books = tuple(BookRecord.model_validate(entry) for entry in raw)
    logger.info(f"📚 Catálogo cargado: {len(books)} libros desde {data_file}")
    return books


def get_books(data_file: Path) -> List[BookRecord]:
    """Devuelve los registros crudos del catálogo (copia de la lista cacheada)."""
    return list(_load_books(Path(data_file)))


def clear_cache() -> None:
    """Olvida el dataset cacheado; útil en tests o al cambiar de fichero."""
    _load_books.cache_clear()
