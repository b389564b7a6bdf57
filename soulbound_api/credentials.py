"""
Signing credential loading.

The minting wallet secret is stored as base64 of a JSON byte array, i.e. the
same `[12, 34, ...]` format the Solana CLI writes to id.json, base64-wrapped so
it fits in a single environment variable.
"""

import base64
import binascii
import json
from typing import Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .errors import ConfigurationError

SECRET_KEY_LENGTH = 64


def decode_secret_key(secret_base64: Optional[str]) -> bytes:
    """
    Decode base64(JSON byte array) into raw secret key bytes.

    Raises:
        ConfigurationError: if the value is absent or not a 64-byte array
    """
    if not secret_base64:
        raise ConfigurationError("Missing WALLET_SECRET_BASE64 in .env")

    try:
        raw = base64.b64decode(secret_base64, validate=True).decode("utf-8")
        values = json.loads(raw)
        secret = bytes(values)
    except (binascii.Error, UnicodeDecodeError, ValueError, TypeError) as e:
        # Do not echo the secret back in the error message.
        raise ConfigurationError(f"WALLET_SECRET_BASE64 is malformed: {type(e).__name__}") from None

    if len(secret) != SECRET_KEY_LENGTH:
        raise ConfigurationError(
            f"WALLET_SECRET_BASE64 must decode to {SECRET_KEY_LENGTH} bytes, got {len(secret)}"
        )
    return secret


def load_signer(secret_base64: Optional[str]) -> Keypair:
    """Build the minting keypair from configuration."""
    secret = decode_secret_key(secret_base64)
    try:
        return Keypair.from_bytes(secret)
    except ValueError:
        raise ConfigurationError("WALLET_SECRET_BASE64 is not a valid ed25519 keypair") from None


def encode_secret_key(keypair: Keypair) -> str:
    """Inverse of `decode_secret_key`; used to produce WALLET_SECRET_BASE64 values."""
    return base64.b64encode(json.dumps(list(bytes(keypair))).encode("utf-8")).decode("ascii")


def parse_address(value: Optional[str], setting: str) -> Pubkey:
    """
    Parse a configured base58 address.

    Raises:
        ConfigurationError: if missing or not a valid public key
    """
    if not value:
        raise ConfigurationError(f"Missing {setting} in .env")
    try:
        return Pubkey.from_string(value.strip())
    except ValueError:
        raise ConfigurationError(f"{setting} is not a valid address: {value}") from None
