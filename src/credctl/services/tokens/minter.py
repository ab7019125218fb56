"""Minting of RS256 access tokens for the backend's API families.

Both minting policies go through :func:`sign_claims`, which parses nothing and
only signs: it takes a loaded RSA key and a claim builder, a callable that
receives the issued-at timestamp and returns the claim set.

* :func:`access_claims` builds the general-purpose claim set used by
  ``utils gen-jwt``: one access claim picked from the claim taxonomy, ``iat``
  and an optional ``exp``.
* :func:`pairing_auth_claims` builds the fixed ephemeral token used to
  authenticate pairing commands: all-realm pairing access for five minutes.
"""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from credctl.config.const import (
    DEFAULT_ACCESS_PATTERNS,
    DEFAULT_EXPIRY_SECONDS,
    JWT_ALGORITHM,
    PAIRING_AUTH_PATTERN,
    PAIRING_AUTH_TTL_SECONDS,
)
from credctl.services.errors import EInvalidExpiry, EKeyMaterial, ESigning

from .enums import CLAIM_KEYS, TokenType

__all__ = [
    "ClaimBuilder",
    "Clock",
    "load_private_key",
    "read_private_key",
    "access_claims",
    "pairing_auth_claims",
    "sign_claims",
    "mint",
    "mint_from_file",
    "mint_pairing_auth",
]

logger = logging.getLogger(__name__)

ClaimBuilder = Callable[[int], dict[str, Any]]
Clock = Callable[[], float]


def load_private_key(pem: bytes | str) -> rsa.RSAPrivateKey:
    """Parse an unencrypted PKCS#1 or PKCS#8 PEM RSA private key."""

    data = pem.encode("utf-8") if isinstance(pem, str) else pem
    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError) as exc:
        raise EKeyMaterial(f"failed to parse private key: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise EKeyMaterial(f"expected an RSA private key, got {type(key).__name__}")
    return key


def read_private_key(path: str | Path) -> bytes:
    key_path = Path(path).expanduser()
    try:
        return key_path.read_bytes()
    except OSError as exc:
        raise EKeyMaterial(f"failed to read private key {key_path}: {exc}") from exc


def access_claims(
    token_type: TokenType,
    access_patterns: Optional[Iterable[str]] = None,
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
) -> ClaimBuilder:
    claim_key = CLAIM_KEYS[token_type]
    if isinstance(access_patterns, str):
        # a single pattern, not an iterable of one-character patterns
        access_patterns = [access_patterns]
    patterns = list(access_patterns or ())
    if not patterns:
        patterns = list(DEFAULT_ACCESS_PATTERNS)
    if expiry_seconds < 0:
        raise EInvalidExpiry(f"expiry must be zero or positive, got {expiry_seconds}")

    def build(iat: int) -> dict[str, Any]:
        claims: dict[str, Any] = {"iat": iat, claim_key: list(patterns)}
        # 0 means the token never expires
        if expiry_seconds != 0:
            claims["exp"] = iat + expiry_seconds
        return claims

    return build


def pairing_auth_claims() -> ClaimBuilder:
    claim_key = CLAIM_KEYS[TokenType.PAIRING]

    def build(iat: int) -> dict[str, Any]:
        return {
            claim_key: [PAIRING_AUTH_PATTERN],
            "iat": iat,
            "exp": iat + PAIRING_AUTH_TTL_SECONDS,
        }

    return build


def sign_claims(key: rsa.RSAPrivateKey, build_claims: ClaimBuilder, *, clock: Clock = time.time) -> str:
    iat = int(clock())
    claims = build_claims(iat)
    try:
        token = jwt.encode(claims, key, algorithm=JWT_ALGORITHM)
    except (jwt.PyJWTError, ValueError, TypeError) as exc:
        raise ESigning(f"failed to sign token: {exc}") from exc
    logger.debug("signed %s token with claims %s", JWT_ALGORITHM, sorted(claims))
    return token


def mint(
    token_type: str | TokenType,
    private_key_pem: bytes | str,
    access_patterns: Optional[Iterable[str]] = None,
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
    *,
    clock: Clock = time.time,
) -> str:
    """Mint a signed token granting ``access_patterns`` on one API family.

    Args:
        token_type: One of the claim taxonomy names, e.g. ``"realm-management"``.
        private_key_pem: PEM encoded RSA private key (PKCS#1 or PKCS#8).
        access_patterns: Patterns stored under the type's claim key. Defaults
            to ``[".*::.*"]``, i.e. all-access.
        expiry_seconds: Token lifetime. ``0`` omits ``exp`` entirely.
        clock: Source of the issued-at time, in Unix seconds.

    The type is validated before the key material is looked at, so an unknown
    type never costs a key parse.
    """

    resolved = TokenType.parse(token_type)
    builder = access_claims(resolved, access_patterns, expiry_seconds)
    key = load_private_key(private_key_pem)
    token = sign_claims(key, builder, clock=clock)
    logger.info("minted %s token", resolved.value)
    return token


def mint_from_file(
    token_type: str | TokenType,
    key_path: str | Path,
    access_patterns: Optional[Iterable[str]] = None,
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
    *,
    clock: Clock = time.time,
) -> str:
    resolved = TokenType.parse(token_type)
    return mint(resolved, read_private_key(key_path), access_patterns, expiry_seconds, clock=clock)


def mint_pairing_auth(private_key_pem: bytes | str, *, clock: Clock = time.time) -> str:
    key = load_private_key(private_key_pem)
    return sign_claims(key, pairing_auth_claims(), clock=clock)
