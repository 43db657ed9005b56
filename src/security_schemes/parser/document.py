"""Read the security schemes declared by an OpenAPI 3.x document."""

import logging
from pathlib import Path
from typing import Any

from security_schemes.model.scheme import SecuritySchemeObject

from .codec import SchemeDecodeError, load_document, scheme_from_dict

logger = logging.getLogger(__name__)


def load_security_schemes(file_path: Path) -> dict[str, SecuritySchemeObject]:
    """Load ``components.securitySchemes`` from a YAML or JSON OpenAPI file."""
    text = file_path.read_text(encoding="utf-8")
    schemes = parse_security_schemes(load_document(text))
    logger.debug("Loaded %d security schemes from %s", len(schemes), file_path)
    return schemes


def parse_security_schemes(doc: Any) -> dict[str, SecuritySchemeObject]:
    """Decode the security schemes of an already parsed OpenAPI document.

    Errors name the scheme, e.g. ``field == "petstore_auth.flows"``.
    """
    if not isinstance(doc, dict):
        raise SchemeDecodeError("expected an OpenAPI document mapping")

    components = doc.get("components") or {}
    if not isinstance(components, dict):
        raise SchemeDecodeError("expected a mapping", "components")
    raw_schemes = components.get("securitySchemes") or {}
    if not isinstance(raw_schemes, dict):
        raise SchemeDecodeError("expected a mapping", "components.securitySchemes")

    result = {}
    for name, raw in raw_schemes.items():
        if isinstance(raw, dict) and "$ref" in raw:
            raise SchemeDecodeError(f"unresolved reference {raw['$ref']!r}", str(name))
        try:
            result[str(name)] = scheme_from_dict(raw)
        except SchemeDecodeError as e:
            field = f"{name}.{e.field}" if e.field else str(name)
            raise SchemeDecodeError(e.message, field) from e
    return result
