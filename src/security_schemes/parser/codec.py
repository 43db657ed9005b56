"""YAML / JSON codec for security scheme objects.

Documents use the OpenAPI field names as keys (``in``, ``bearerFormat``,
``openIdConnectUrl``). Absent optional fields are omitted on write and
read back as ``None``.
"""

import json
import logging
from typing import Any

import yaml
from pydantic import ValidationError

from security_schemes.model.scheme import SecuritySchemeObject

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "yaml"
FORMATS = ("yaml", "json")
TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader which reads unquoted dates and timestamps as strings.

    Documents are JSON-compatible, so every scalar must encode back to
    the value it was read from.
    """


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class SchemeDecodeError(ValueError):
    """A document fragment could not be decoded into a security scheme.

    ``field`` is the dotted document path of the offending key, or None
    when the document itself is malformed.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(f"{field}: {message}" if field else message)
        self.message = message
        self.field = field


def scheme_to_dict(scheme: SecuritySchemeObject) -> dict[str, Any]:
    """Convert a scheme to a plain dict keyed by OpenAPI field names."""
    return scheme.model_dump(mode="json", by_alias=True, exclude_none=True)


def scheme_from_dict(data: Any) -> SecuritySchemeObject:
    """Build a scheme from a decoded document fragment."""
    if not isinstance(data, dict):
        raise SchemeDecodeError(f"expected a mapping, got {type(data).__name__}")

    try:
        return SecuritySchemeObject.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        logger.debug("Rejected security scheme %r: %s", data, e)
        raise SchemeDecodeError(error["msg"], field) from e


def encode_scheme(scheme: SecuritySchemeObject, fmt: str = DEFAULT_FORMAT) -> str:
    """Serialize a scheme to YAML or JSON text."""
    data = scheme_to_dict(scheme)
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    raise ValueError(f"Unsupported format {fmt!r}, expected one of {FORMATS}")


def load_document(text: str) -> Any:
    """Parse JSON or YAML text into plain Python values.

    JSON is tried first: tab indentation and ``\\uXXXX`` surrogate pairs
    are valid JSON that YAML does not read the same way.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.load(text, Loader=DocumentLoader)
    except yaml.YAMLError as e:
        raise SchemeDecodeError(f"malformed document: {e}") from e


def decode_scheme(text: str) -> SecuritySchemeObject:
    """Parse YAML or JSON text into a scheme.

    Raises SchemeDecodeError on malformed text, a missing ``type``, or a
    value outside the fixed sets for ``type`` and ``in``.
    """
    return scheme_from_dict(load_document(text))
