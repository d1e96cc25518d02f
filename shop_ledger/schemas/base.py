"""
Base class for UI-shaped records.

The outer surface speaks camelCase; Python code uses snake_case
attribute names. populate_by_name lets both spellings in.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UIModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
