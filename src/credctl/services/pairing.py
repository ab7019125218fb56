from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import jwt

from credctl.services.cli_config import CliConfig
from credctl.services.errors import EPairingConfig
from credctl.services.tokens.minter import Clock, mint_pairing_auth, read_private_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PairingSession:
    """Credentials for pairing API calls made on behalf of the operator."""

    realm: str
    pairing_url: str
    token: str

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def expires_at(self) -> int | None:
        claims = jwt.decode(self.token, options={"verify_signature": False})
        exp = claims.get("exp")
        return int(exp) if exp is not None else None


def open_pairing_session(config: CliConfig, *, clock: Clock = time.time) -> PairingSession:
    """Resolve pairing settings and mint the ephemeral pairing token.

    Every check runs before the key file is read, and the token is minted
    before the session is handed to any pairing command.
    """

    pairing_url = config.resolve_pairing_url()
    key_path = config.realm_key_path()
    if key_path is None:
        raise EPairingConfig("realm-key is required")
    realm = config.realm.name
    if not realm:
        raise EPairingConfig("realm is required")

    token = mint_pairing_auth(read_private_key(key_path), clock=clock)
    logger.info("pairing session ready for realm %s at %s", realm, pairing_url)
    return PairingSession(realm=realm, pairing_url=pairing_url, token=token)


__all__ = ["PairingSession", "open_pairing_session"]
