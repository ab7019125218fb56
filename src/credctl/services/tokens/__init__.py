"""Claim taxonomy and token minting."""
from .enums import CLAIM_KEYS, TOKEN_TYPE_NAMES, TokenType, claim_key_for
from .minter import (
    access_claims,
    load_private_key,
    mint,
    mint_from_file,
    mint_pairing_auth,
    pairing_auth_claims,
    read_private_key,
    sign_claims,
)

__all__ = [
    "CLAIM_KEYS",
    "TOKEN_TYPE_NAMES",
    "TokenType",
    "claim_key_for",
    "access_claims",
    "load_private_key",
    "mint",
    "mint_from_file",
    "mint_pairing_auth",
    "pairing_auth_claims",
    "read_private_key",
    "sign_claims",
]
