"""Error classes shared by the credential issuance services.

Errors come in two tiers. :class:`ERecoverable` subclasses describe bad input
that is detected before any I/O or cryptography and are reported back to the
caller. :class:`EFatal` subclasses wrap failures of the random source, key
parsing, file I/O or signing; the CLI logs them and exits.
"""

from __future__ import annotations

from typing import Sequence


class CredError(RuntimeError):
    """Base error for credential issuance."""


class ERecoverable(CredError):
    """Input error reported to the caller without side effects."""


class EFatal(CredError):
    """Failure that aborts the current invocation."""


class EInvalidTokenType(ERecoverable, ValueError):
    """Raised when a token type is not part of the claim taxonomy."""

    def __init__(self, token_type: str, *, valid: Sequence[str]) -> None:
        self.token_type = token_type
        self.valid = tuple(valid)
        super().__init__("Invalid type. Valid types are: " + ", ".join(self.valid))


class EInvalidExpiry(ERecoverable, ValueError):
    """Raised for negative expiry offsets."""


class EInvalidRealm(ERecoverable, ValueError):
    """Raised when a realm name cannot be used to build key file names."""


class EInvalidDeviceId(ERecoverable, ValueError):
    """Raised when a string is not an encoded device id."""


class EPairingConfig(ERecoverable):
    """Raised when the pairing session cannot be configured."""


class EConfig(EFatal):
    """Raised when the configuration file cannot be read or parsed."""


class EKeyGeneration(EFatal):
    """Raised when RSA key generation fails."""


class EKeyWrite(EFatal):
    """Raised when a PEM file cannot be written."""


class EKeyMaterial(EFatal):
    """Raised when private key material cannot be read or parsed."""


class ESigning(EFatal):
    """Raised when a claim set cannot be signed."""


__all__ = [
    "CredError",
    "ERecoverable",
    "EFatal",
    "EInvalidTokenType",
    "EInvalidExpiry",
    "EInvalidRealm",
    "EInvalidDeviceId",
    "EPairingConfig",
    "EConfig",
    "EKeyGeneration",
    "EKeyWrite",
    "EKeyMaterial",
    "ESigning",
]
