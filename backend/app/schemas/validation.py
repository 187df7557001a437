# backend/app/schemas/validation.py
"""
Capa de validación entre los datos crudos de la petición y los esquemas.

Los endpoints reciben el cuerpo o los query params sin tipar y los pasan por
``validate_payload`` antes de tocar el store. Un fallo se convierte en
``ValidationError`` con la lista de issues por campo, nunca en un 500.
"""

from typing import Any, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError, issues_from_errors

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validate_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    """
    Valida ``data`` contra ``schema``.

    Args:
        schema: Clase del esquema Pydantic de la operación
        data: Diccionario recibido (cuerpo JSON o query params)

    Returns:
        La instancia validada del esquema

    Raises:
        ValidationError: si algún campo falta, tiene tipo incorrecto o está fuera de rango
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(issues_from_errors(e.errors())) from e
