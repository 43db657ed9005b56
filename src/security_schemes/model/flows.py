"""OAuth2 flow configuration objects."""

from pydantic import AnyUrl, Field

from .base import ExtendableObject


class OAuthFlowObject(ExtendableObject):
    """Configuration details for a single OAuth2 flow."""

    __hash__ = None

    authorization_url: AnyUrl | None = Field(default=None, alias="authorizationUrl")
    token_url: AnyUrl | None = Field(default=None, alias="tokenUrl")
    refresh_url: AnyUrl | None = Field(default=None, alias="refreshUrl")
    scopes: dict[str, str] | None = None  # scope name -> description


class OAuthFlowsObject(ExtendableObject):
    """The OAuth2 flows supported by a scheme.

    ``client_credentials`` was called ``application`` and
    ``authorization_code`` was called ``accessCode`` in OpenAPI 2.0.
    """

    __hash__ = None

    implicit: OAuthFlowObject | None = None
    password: OAuthFlowObject | None = None
    client_credentials: OAuthFlowObject | None = Field(default=None, alias="clientCredentials")
    authorization_code: OAuthFlowObject | None = Field(default=None, alias="authorizationCode")
