"""HTTP authentication scheme tokens.

Values SHOULD be registered in the IANA Authentication Scheme registry,
which keeps growing, so any token is accepted. Tokens are case-insensitive
and are stored lowercased.
"""

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class HTTPAuthScheme(str):
    """A lowercase HTTP authentication scheme token, e.g. ``basic`` or ``bearer``.

    Normalization happens at construction, so equality and hashing are
    plain string operations on the lowercase value:

    >>> HTTPAuthScheme("Bearer") == HTTPAuthScheme.bearer
    True
    """

    __slots__ = ()

    def __new__(cls, value: str) -> "HTTPAuthScheme":
        if not isinstance(value, str):
            raise TypeError(f"HTTP auth scheme must be a string, got {type(value).__name__}")
        return super().__new__(cls, value.lower())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.to_string_ser_schema(),
        )


HTTPAuthScheme.basic = HTTPAuthScheme("basic")
HTTPAuthScheme.bearer = HTTPAuthScheme("bearer")
HTTPAuthScheme.digest = HTTPAuthScheme("digest")
# HOBA may be used with servers or proxies; on a 407 the proxy
# authentication header fields are used instead.
HTTPAuthScheme.hoba = HTTPAuthScheme("hoba")
HTTPAuthScheme.mutual = HTTPAuthScheme("mutual")
HTTPAuthScheme.oauth = HTTPAuthScheme("oauth")
HTTPAuthScheme.scram_sha_1 = HTTPAuthScheme("scram-sha-1")
HTTPAuthScheme.scram_sha_256 = HTTPAuthScheme("scram-sha-256")
HTTPAuthScheme.vapid = HTTPAuthScheme("vapid")
