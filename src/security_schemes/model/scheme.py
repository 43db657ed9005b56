"""The OpenAPI Security Scheme Object.

Supported schemes are HTTP authentication, an API key (as a header, a
cookie parameter or a query parameter), mutual TLS, OAuth2's common flows
(implicit, password, client credentials and authorization code) as defined
in RFC 6749, and OpenID Connect Discovery.

The object is one flat record: every field is optional apart from
``type``, and fields that do not apply to the chosen ``type`` are accepted
as-is. Use ``security_schemes.checker.validator`` to report such
combinations.
"""

from enum import Enum

from pydantic import AnyUrl, Field

from .auth_scheme import HTTPAuthScheme
from .base import ExtendableObject
from .flows import OAuthFlowObject, OAuthFlowsObject

DEFAULT_API_KEY_NAME = "api_key"


class SecuritySchemeType(str, Enum):
    """The ``type`` discriminator of a security scheme."""

    API_KEY = "apiKey"
    HTTP = "http"
    MUTUAL_TLS = "mutualTLS"
    OAUTH2 = "oauth2"
    OPEN_ID_CONNECT = "openIdConnect"


class ApiKeyLocation(str, Enum):
    """Where an API key is transmitted (the ``in`` field)."""

    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class SecuritySchemeObject(ExtendableObject):
    """Defines a security scheme that can be used by the operations."""

    __hash__ = None

    type: SecuritySchemeType
    description: str | None = None  # CommonMark
    name: str | None = None
    location: ApiKeyLocation | None = Field(default=None, alias="in")
    scheme: HTTPAuthScheme | None = None
    bearer_format: str | None = Field(default=None, alias="bearerFormat")
    flows: OAuthFlowsObject | None = None
    # OpenID Connect requires TLS
    open_id_connect_url: AnyUrl | None = Field(default=None, alias="openIdConnectUrl")

    @classmethod
    def basic(cls) -> "SecuritySchemeObject":
        """HTTP Basic authentication."""
        return cls(type=SecuritySchemeType.HTTP, scheme=HTTPAuthScheme.basic)

    @classmethod
    def api_key(cls, name: str = DEFAULT_API_KEY_NAME) -> "SecuritySchemeObject":
        """An API key sent in the header called ``name``."""
        return cls(type=SecuritySchemeType.API_KEY, name=name, location=ApiKeyLocation.HEADER)

    @classmethod
    def bearer_jwt(cls) -> "SecuritySchemeObject":
        """HTTP Bearer authentication with a JWT token."""
        return cls(type=SecuritySchemeType.HTTP, scheme=HTTPAuthScheme.bearer, bearer_format="JWT")

    @classmethod
    def oauth(
        cls,
        authorization_url: AnyUrl | str,
        token_url: AnyUrl | str | None = None,
        scopes: dict[str, str] | None = None,
    ) -> "SecuritySchemeObject":
        """OAuth2 with the implicit flow configured.

        The implicit flow is being deprecated by the OAuth 2.0 Security Best
        Current Practice; prefer the authorization code flow with PKCE for
        new APIs by building the flows explicitly.
        """
        return cls(
            type=SecuritySchemeType.OAUTH2,
            flows=OAuthFlowsObject(
                implicit=OAuthFlowObject(
                    authorization_url=authorization_url,
                    token_url=token_url,
                    scopes=scopes,
                )
            ),
        )
