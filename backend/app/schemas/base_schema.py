# backend/app/schemas/base_schema.py
"""
Esquema base compartido: alias camelCase en la API, snake_case en el código.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
