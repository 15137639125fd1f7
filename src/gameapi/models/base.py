"""Base model for wire payloads.

Every response model must give each field a zero/default value so that a
partially filled JSON body still produces a complete record.
"""

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """Base model for all request and response payloads."""

    model_config = ConfigDict(populate_by_name=True)
