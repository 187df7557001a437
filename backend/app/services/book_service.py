# backend/app/services/book_service.py
"""
Servicio de lectura del catálogo de libros.

Transforma los registros crudos del dataset en libros listos para mostrar.
La única regla de negocio es la normalización del género: si viene como
lista se une en un único texto separado por ", " conservando el orden.
"""

from pathlib import Path
from typing import List, Optional, Union

from app.core.config import settings
from app.crud import book_crud
from app.schemas.book_schema import BookRecord, BookResponse

GENRE_SEPARATOR = ", "


def normalize_genre(genre: Union[str, List[str], None]) -> Optional[str]:
    """Une una lista de géneros en un solo texto; un texto se devuelve intacto."""
    if isinstance(genre, list):
        return GENRE_SEPARATOR.join(genre)
    return genre


def to_response(record: BookRecord) -> BookResponse:
    data = record.model_dump()
    data["genre"] = normalize_genre(record.genre)
    return BookResponse.model_validate(data)


class BookService:
    """
    Servicio para exponer el catálogo estático.

    No tiene efectos secundarios: cada llamada a ``list_books`` recorre el
    dataset cacheado y devuelve objetos nuevos.
    """

    def __init__(self, data_file: Optional[Path] = None):
        self.data_file = Path(data_file or settings.BOOKS_DATA_FILE)

    def list_books(self) -> List[BookResponse]:
        """Devuelve todos los libros con el género normalizado."""
        return [to_response(record) for record in book_crud.get_books(self.data_file)]
