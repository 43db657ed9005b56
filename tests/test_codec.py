import json

import pytest
import yaml

from security_schemes.model.auth_scheme import HTTPAuthScheme
from security_schemes.model.flows import OAuthFlowObject, OAuthFlowsObject
from security_schemes.model.scheme import ApiKeyLocation, SecuritySchemeObject, SecuritySchemeType
from security_schemes.parser.codec import (
    SchemeDecodeError,
    decode_scheme,
    encode_scheme,
    scheme_from_dict,
    scheme_to_dict,
)

SCHEMES = [
    SecuritySchemeObject.basic(),
    SecuritySchemeObject.api_key(),
    SecuritySchemeObject.bearer_jwt(),
    SecuritySchemeObject.oauth(
        "https://auth.example.com/authorize",
        token_url="https://auth.example.com/token",
        scopes={"read:x": "Read X", "write:x": "Write X"},
    ),
    SecuritySchemeObject(
        type=SecuritySchemeType.OAUTH2,
        description="All the flows",
        flows=OAuthFlowsObject(
            password=OAuthFlowObject(token_url="https://auth.example.com/token", scopes={}),
            authorization_code=OAuthFlowObject(
                authorization_url="https://auth.example.com/authorize",
                token_url="https://auth.example.com/token",
                refresh_url="https://auth.example.com/refresh",
            ),
        ),
    ),
    SecuritySchemeObject(
        type=SecuritySchemeType.OPEN_ID_CONNECT,
        open_id_connect_url="https://auth.example.com/.well-known/openid-configuration",
    ),
    SecuritySchemeObject(type=SecuritySchemeType.MUTUAL_TLS, description="Client certificate"),
    SecuritySchemeObject.model_validate({"type": "http", "scheme": "Negotiate", "x-kerberos-realm": "EXAMPLE.COM"}),
]


class TestRoundTrip:
    @pytest.mark.parametrize("scheme", SCHEMES)
    def test_yaml_round_trip(self, scheme):
        assert decode_scheme(encode_scheme(scheme, "yaml")) == scheme

    @pytest.mark.parametrize("scheme", SCHEMES)
    def test_json_round_trip(self, scheme):
        assert decode_scheme(encode_scheme(scheme, "json")) == scheme

    def test_date_like_extension_round_trip(self):
        scheme = decode_scheme("type: mutualTLS\nx-since: 2020-01-01\nx-updated: 2021-06-01T10:00:00Z\n")
        assert decode_scheme(encode_scheme(scheme, "yaml")) == scheme
        assert decode_scheme(encode_scheme(scheme, "json")) == scheme


class TestEncode:
    def test_location_uses_in_key(self):
        data = scheme_to_dict(SecuritySchemeObject.api_key("X-Key"))
        assert data == {"type": "apiKey", "name": "X-Key", "in": "header"}

    def test_json_output_uses_document_keys(self):
        data = json.loads(encode_scheme(SecuritySchemeObject.bearer_jwt(), "json"))
        assert data == {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}

    def test_omits_absent_fields(self):
        data = yaml.safe_load(encode_scheme(SecuritySchemeObject.oauth("https://auth.example.com/authorize")))
        assert data == {
            "type": "oauth2",
            "flows": {"implicit": {"authorizationUrl": "https://auth.example.com/authorize"}},
        }

    def test_open_id_connect_url_key(self):
        scheme = SecuritySchemeObject(
            type=SecuritySchemeType.OPEN_ID_CONNECT,
            open_id_connect_url="https://auth.example.com/.well-known/openid-configuration",
        )
        assert scheme_to_dict(scheme)["openIdConnectUrl"] == "https://auth.example.com/.well-known/openid-configuration"

    def test_extensions_are_written(self):
        scheme = scheme_from_dict({"type": "mutualTLS", "x-owner": {"team": "platform"}})
        assert scheme_to_dict(scheme) == {"type": "mutualTLS", "x-owner": {"team": "platform"}}

    def test_unsupported_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            encode_scheme(SecuritySchemeObject.basic(), "toml")


class TestDecode:
    def test_decode_yaml(self):
        scheme = decode_scheme("type: apiKey\nname: token\nin: query\n")
        assert scheme.type == SecuritySchemeType.API_KEY
        assert scheme.name == "token"
        assert scheme.location == ApiKeyLocation.QUERY

    def test_decode_json(self):
        scheme = decode_scheme('{"type": "http", "scheme": "BASIC"}')
        assert scheme == SecuritySchemeObject.basic()
        assert scheme.scheme == HTTPAuthScheme.basic

    def test_oauth2_without_flows(self):
        scheme = decode_scheme('{"type": "oauth2"}')
        assert scheme.type == SecuritySchemeType.OAUTH2
        assert scheme.flows is None

    def test_unknown_type(self):
        with pytest.raises(SchemeDecodeError) as exc_info:
            decode_scheme('{"type": "kerberos"}')
        assert exc_info.value.field == "type"

    def test_missing_type(self):
        with pytest.raises(SchemeDecodeError) as exc_info:
            decode_scheme("name: api_key\nin: header\n")
        assert exc_info.value.field == "type"

    def test_unknown_location(self):
        with pytest.raises(SchemeDecodeError) as exc_info:
            decode_scheme("type: apiKey\nname: key\nin: body\n")
        assert exc_info.value.field == "in"

    def test_nested_field_path(self):
        text = "type: oauth2\nflows:\n  implicit:\n    authorizationUrl: not a url\n"
        with pytest.raises(SchemeDecodeError) as exc_info:
            decode_scheme(text)
        assert exc_info.value.field == "flows.implicit.authorizationUrl"

    def test_malformed_text(self):
        with pytest.raises(SchemeDecodeError) as exc_info:
            decode_scheme("type: [http\n")
        assert exc_info.value.field is None
        assert "malformed" in str(exc_info.value)

    def test_not_a_mapping(self):
        with pytest.raises(SchemeDecodeError, match="expected a mapping"):
            decode_scheme("- type: http\n")

    def test_tab_indented_json(self):
        text = json.dumps({"type": "http", "scheme": "Basic"}, indent="\t")
        assert decode_scheme(text) == SecuritySchemeObject.basic()

    def test_json_escaped_non_bmp_characters(self):
        text = json.dumps({"type": "mutualTLS", "description": "cert \N{LOCK}"})
        assert "\\ud83d" in text
        assert decode_scheme(text).description == "cert \N{LOCK}"

    def test_yaml_dates_stay_strings(self):
        scheme = decode_scheme("type: mutualTLS\nx-since: 2020-01-01\n")
        assert scheme.extensions == {"x-since": "2020-01-01"}

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            decode_scheme('{"type": "kerberos"}')
