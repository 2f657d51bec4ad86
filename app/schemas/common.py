# File: app/schemas/common.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire format is camelCase; python side stays snake_case."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
