"""Token types and the claim key carrying access patterns for each API family."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from credctl.services.errors import EInvalidTokenType

__all__ = [
    "TokenType",
    "CLAIM_KEYS",
    "TOKEN_TYPE_NAMES",
    "claim_key_for",
]


class _StrEnum(str, Enum):
    """Simple ``str``-backed enum compatible with Python 3.10."""

    def __str__(self) -> str:  # pragma: no cover - convenience for logging only
        return str(self.value)


class TokenType(_StrEnum):
    HOUSEKEEPING = "housekeeping"
    REALM_MANAGEMENT = "realm-management"
    PAIRING = "pairing"
    APPENGINE = "appengine"
    CHANNELS = "channels"

    @classmethod
    def parse(cls, value: "str | TokenType") -> "TokenType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise EInvalidTokenType(str(value), valid=TOKEN_TYPE_NAMES) from None


# New API families are appended; existing entries never change.
CLAIM_KEYS: Mapping[TokenType, str] = MappingProxyType(
    {
        TokenType.HOUSEKEEPING: "a_ha",
        TokenType.REALM_MANAGEMENT: "a_rma",
        TokenType.PAIRING: "a_pa",
        TokenType.APPENGINE: "a_aea",
        TokenType.CHANNELS: "a_ch",
    }
)

TOKEN_TYPE_NAMES: tuple[str, ...] = tuple(t.value for t in TokenType)


def claim_key_for(token_type: "str | TokenType") -> str:
    return CLAIM_KEYS[TokenType.parse(token_type)]
