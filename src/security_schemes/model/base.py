"""Shared base model for OpenAPI objects.

OpenAPI objects may carry specification extensions: keys starting with
``x-`` whose values are arbitrary JSON. Those are kept on the model and
written back on encode; any other unknown key is dropped on read.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

logger = logging.getLogger(__name__)

EXTENSION_PREFIX = "x-"


class ExtendableObject(BaseModel):
    """An immutable OpenAPI object which keeps its ``x-`` extensions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")
    # scopes and extensions may hold dicts; subclasses repeat this
    __hash__ = None

    @model_validator(mode="before")
    @classmethod
    def _drop_unknown_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        known = set()
        for field_name, field in cls.model_fields.items():
            known.add(field_name)
            if field.alias:
                known.add(field.alias)

        kept = {}
        for key, value in data.items():
            if key in known or (isinstance(key, str) and key.startswith(EXTENSION_PREFIX)):
                kept[key] = value
            else:
                logger.warning("Ignoring unknown key %r on %s", key, cls.__name__)
        return kept

    @property
    def extensions(self) -> dict[str, Any]:
        """Specification extensions (``x-`` keys) attached to this object."""
        return dict(self.model_extra or {})
