"""Shared base for comment tree models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Frozen snapshot model.

    Python code uses snake_case attributes; the stored JSON uses the camelCase
    aliases (``parentId``, ``childIds``). Either spelling is accepted on input.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
