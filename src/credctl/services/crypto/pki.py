from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from credctl.config.const import PRIVATE_KEY_SUFFIX, PUBLIC_KEY_SUFFIX, RSA_KEY_BITS, RSA_PUBLIC_EXPONENT
from credctl.services.errors import EInvalidRealm, EKeyGeneration, EKeyWrite

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class KeypairFiles:
    private_key: Path
    public_key: Path


def generate_rsa_key(bits: int = RSA_KEY_BITS) -> rsa.RSAPrivateKey:
    try:
        return rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=bits)
    except (ValueError, OSError) as exc:
        raise EKeyGeneration(f"RSA key generation failed: {exc}") from exc


def private_key_pem(key: rsa.RSAPrivateKey) -> bytes:
    # PKCS#1, "RSA PRIVATE KEY"
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


def public_key_pem(key: rsa.RSAPrivateKey) -> bytes:
    # SubjectPublicKeyInfo, "PUBLIC KEY"
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def write_private_key(path: Path, key: rsa.RSAPrivateKey) -> None:
    _write_pem(path, private_key_pem(key), mode=0o600)


def write_public_key(path: Path, key: rsa.RSAPrivateKey) -> None:
    _write_pem(path, public_key_pem(key))


def _write_pem(path: Path, pem: bytes, mode: int = 0o644) -> None:
    try:
        # file exists with its final mode before any key bytes are written
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as fh:
            try:
                # an existing file keeps its old mode through O_CREAT
                path.chmod(mode)
            except PermissionError:
                # best effort on platforms that do not support chmod
                pass
            fh.write(pem)
    except OSError as exc:
        raise EKeyWrite(f"failed to write {path}: {exc}") from exc
    logger.info("wrote %s", path)


def keypair_paths(realm: str, directory: Path | None = None) -> KeypairFiles:
    if not realm or not realm.strip():
        raise EInvalidRealm("realm name is required")
    if "/" in realm or "\\" in realm:
        raise EInvalidRealm(f"realm name must not contain path separators: {realm!r}")
    base = Path.cwd() if directory is None else Path(directory)
    return KeypairFiles(
        private_key=base / f"{realm}{PRIVATE_KEY_SUFFIX}",
        public_key=base / f"{realm}{PUBLIC_KEY_SUFFIX}",
    )


def generate_keypair(realm: str, directory: Path | None = None) -> KeypairFiles:
    """Generate a realm keypair and write it as ``<realm>_private.pem`` / ``<realm>_public.pem``.

    Existing files are overwritten. The private key is written first; if the
    public key write fails afterwards the private key file is left in place and
    both files must be regenerated.
    """

    paths = keypair_paths(realm, directory)
    key = generate_rsa_key()
    logger.debug("generated %d-bit RSA key for realm %s", key.key_size, realm)
    write_private_key(paths.private_key, key)
    write_public_key(paths.public_key, key)
    return paths


__all__ = [
    "KeypairFiles",
    "generate_rsa_key",
    "private_key_pem",
    "public_key_pem",
    "write_private_key",
    "write_public_key",
    "keypair_paths",
    "generate_keypair",
]
