from __future__ import annotations

import logging
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from credctl.services.crypto.pki import KeypairFiles, generate_keypair
from credctl.services.tokens.minter import load_private_key

_ENV_VARS = (
    "CREDCTL_CONFIG",
    "CREDCTL_URL",
    "CREDCTL_REALM_NAME",
    "CREDCTL_REALM_KEY",
    "CREDCTL_PAIRING_URL",
    "CREDCTL_LOG_LEVEL",
)


@pytest.fixture(scope="session")
def realm_keypair(tmp_path_factory) -> KeypairFiles:
    # one 4096-bit key for the whole suite
    return generate_keypair("testrealm", tmp_path_factory.mktemp("keys"))


@pytest.fixture(scope="session")
def realm_private_key(realm_keypair) -> rsa.RSAPrivateKey:
    return load_private_key(realm_keypair.private_key.read_bytes())


@pytest.fixture(scope="session")
def realm_public_key(realm_keypair) -> rsa.RSAPublicKey:
    return serialization.load_pem_public_key(realm_keypair.public_key.read_bytes())


@pytest.fixture(scope="session")
def pkcs8_private_pem(realm_private_key) -> bytes:
    return realm_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    yield
    logger = logging.getLogger("credctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
