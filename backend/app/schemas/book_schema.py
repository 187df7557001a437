# backend/app/schemas/book_schema.py
"""
Esquemas Pydantic para el catálogo de libros.

- BookRecord: registro tal como viene del dataset estático; ``genre`` puede
  ser un texto o una lista ordenada de textos.
- BookResponse: libro listo para mostrar; ``genre`` siempre es un único texto.
"""

from typing import List, Optional, Union

from pydantic import ConfigDict

from app.schemas.base_schema import CamelModel


class BookBase(CamelModel):
    """Propiedades comunes entre el registro crudo y la respuesta."""
    id: str
    title: str
    author: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    published_year: Optional[int] = None
    rating: Optional[float] = None

    # Campos extra del dataset se conservan tal cual
    model_config = ConfigDict(extra="allow")


class BookRecord(BookBase):
    genre: Union[str, List[str], None] = None


class BookResponse(BookBase):
    genre: Optional[str] = None
