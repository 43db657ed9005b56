"""Semantic checks on security scheme objects.

Decoding accepts any field combination. These checks report the
combinations OpenAPI does not allow for a given ``type``: fields that do
not apply, fields that are required, and per-flow URL requirements.
"""

from security_schemes.model.auth_scheme import HTTPAuthScheme
from security_schemes.model.flows import OAuthFlowObject, OAuthFlowsObject
from security_schemes.model.scheme import SecuritySchemeObject, SecuritySchemeType

TYPE_SPECIFIC_FIELDS = ("name", "location", "scheme", "bearer_format", "flows", "open_id_connect_url")

APPLICABLE_FIELDS = {
    SecuritySchemeType.API_KEY: {"name", "location"},
    SecuritySchemeType.HTTP: {"scheme", "bearer_format"},
    SecuritySchemeType.MUTUAL_TLS: set(),
    SecuritySchemeType.OAUTH2: {"flows"},
    SecuritySchemeType.OPEN_ID_CONNECT: {"open_id_connect_url"},
}

REQUIRED_FIELDS = {
    SecuritySchemeType.API_KEY: ("name", "location"),
    SecuritySchemeType.HTTP: ("scheme",),
    SecuritySchemeType.MUTUAL_TLS: (),
    SecuritySchemeType.OAUTH2: ("flows",),
    SecuritySchemeType.OPEN_ID_CONNECT: ("open_id_connect_url",),
}

REQUIRED_FLOW_URLS = {
    "implicit": ("authorization_url",),
    "password": ("token_url",),
    "client_credentials": ("token_url",),
    "authorization_code": ("authorization_url", "token_url"),
}


def validate_scheme(scheme: SecuritySchemeObject) -> list[str]:
    """Check a scheme for contradictory or incomplete fields.

    Returns a list of human-readable issues, empty when the scheme is fine.
    """
    issues = []
    scheme_type = scheme.type.value

    for field_name in TYPE_SPECIFIC_FIELDS:
        if getattr(scheme, field_name) is None:
            continue
        if field_name not in APPLICABLE_FIELDS[scheme.type]:
            issues.append(f"'{_key(SecuritySchemeObject, field_name)}' is not used by '{scheme_type}' schemes")

    for field_name in REQUIRED_FIELDS[scheme.type]:
        if getattr(scheme, field_name) is None:
            issues.append(f"'{_key(SecuritySchemeObject, field_name)}' is required for '{scheme_type}' schemes")

    if (
        scheme.type == SecuritySchemeType.HTTP
        and scheme.bearer_format is not None
        and scheme.scheme is not None
        and scheme.scheme != HTTPAuthScheme.bearer
    ):
        issues.append(f"'bearerFormat' only applies to the 'bearer' scheme, got '{scheme.scheme}'")

    if scheme.type == SecuritySchemeType.OAUTH2 and scheme.flows is not None:
        issues.extend(_validate_flows(scheme.flows))

    return issues


def validate_schemes(schemes: dict[str, SecuritySchemeObject]) -> dict[str, list[str]]:
    """Check several named schemes.

    Returns dict of {name: issues} for the schemes with issues only.
    """
    result = {}
    for name, scheme in schemes.items():
        issues = validate_scheme(scheme)
        if issues:
            result[name] = issues
    return result


def _validate_flows(flows: OAuthFlowsObject) -> list[str]:
    issues = []
    configured = False
    for flow_name, required in REQUIRED_FLOW_URLS.items():
        flow: OAuthFlowObject | None = getattr(flows, flow_name)
        if flow is None:
            continue
        configured = True
        for url_field in required:
            if getattr(flow, url_field) is None:
                issues.append(
                    f"flows.{_key(OAuthFlowsObject, flow_name)}: "
                    f"'{_key(OAuthFlowObject, url_field)}' is required"
                )
    if not configured:
        issues.append("'flows' does not configure any flow")
    return issues


def _key(model: type, field_name: str) -> str:
    return model.model_fields[field_name].alias or field_name
