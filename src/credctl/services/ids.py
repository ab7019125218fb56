"""Device identifiers in the wire format expected by the backend.

A device id is a random UUID version 4 whose 16 raw bytes are encoded with the
URL-safe base64 alphabet and stripped of ``=`` padding, giving a 22 character
string.
"""
from __future__ import annotations

import base64
import binascii
import string
import uuid
from typing import NewType

from credctl.services.errors import EInvalidDeviceId

__all__ = [
    "DeviceId",
    "generate_device_id",
    "encode_device_id",
    "decode_device_id",
]

DeviceId = NewType("DeviceId", str)

_UUID_BYTES = 16
_ALPHABET = frozenset(string.ascii_letters + string.digits + "-_")


def encode_device_id(value: uuid.UUID) -> DeviceId:
    return DeviceId(base64.urlsafe_b64encode(value.bytes).rstrip(b"=").decode("ascii"))


def generate_device_id() -> DeviceId:
    return encode_device_id(uuid.uuid4())


def decode_device_id(value: str) -> uuid.UUID:
    """Return the UUID carried by an encoded device id.

    Raises:
        EInvalidDeviceId: if ``value`` is not unpadded URL-safe base64 of
            exactly 16 bytes.
    """

    if "=" in value:
        raise EInvalidDeviceId(f"device id must not be padded: {value!r}")
    if not set(value) <= _ALPHABET:
        raise EInvalidDeviceId(f"device id must use the URL-safe base64 alphabet: {value!r}")
    pad = "=" * (-len(value) % 4)
    try:
        raw = base64.urlsafe_b64decode((value + pad).encode("ascii"))
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise EInvalidDeviceId(f"invalid device id {value!r}: {exc}") from exc
    if len(raw) != _UUID_BYTES:
        raise EInvalidDeviceId(f"device id must encode {_UUID_BYTES} bytes, got {len(raw)}")
    decoded = uuid.UUID(bytes=raw)
    # non-zero trailing bits would give a second spelling of the same id
    if encode_device_id(decoded) != value:
        raise EInvalidDeviceId(f"device id is not in canonical form: {value!r}")
    return decoded
