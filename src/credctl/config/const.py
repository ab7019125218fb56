# src/credctl/config/const.py
from __future__ import annotations

from typing import Final

# RSA parameters for realm keypairs
RSA_KEY_BITS: Final[int] = 4096
RSA_PUBLIC_EXPONENT: Final[int] = 65537

JWT_ALGORITHM: Final[str] = "RS256"

# gen-jwt defaults: all-access, five minutes
DEFAULT_EXPIRY_SECONDS: Final[int] = 300
DEFAULT_ACCESS_PATTERNS: Final[tuple[str, ...]] = (".*::.*",)

# ephemeral token used to authenticate pairing commands on behalf of the operator
PAIRING_AUTH_PATTERN: Final[str] = "^.*$::^.*$"
PAIRING_AUTH_TTL_SECONDS: Final[int] = 300

PRIVATE_KEY_SUFFIX: Final[str] = "_private.pem"
PUBLIC_KEY_SUFFIX: Final[str] = "_public.pem"

CONFIG_ENV: Final[str] = "CREDCTL_CONFIG"
DEFAULT_CONFIG_PATH: Final[str] = "~/.config/credctl/config.yaml"
