"""
Base Pydantic schemas
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema; wire names are camelCase aliases, Python names snake_case"""
    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )
