"""
Base model for persisted typecore data.

Python attributes are snake_case; the wire format is the camelCase shape the
typing client has always written, so every persisted model derives from
``CamelModel``. Fields that carry an explicit alias (``_id``) keep it.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Pydantic base model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=False,
    )

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-compatible, camelCase representation of the model."""
        return self.model_dump(mode="json", by_alias=True)
