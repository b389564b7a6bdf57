"""
Metaplex Core program encoding.

Only the pieces the mint flow needs: decoding a CollectionV1 account and
building a CreateV2 instruction that carries an Oracle external plugin.
Everything is Borsh: little-endian integers, u32-length-prefixed strings and
vectors, a 0/1 tag byte for Option, a u8 variant index for enums.
"""

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Optional

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

MPL_CORE_PROGRAM_ID = Pubkey.from_string("CoREENxT6tW1HoK8ypY1SxRMZTcVPm7R94rH4PZNhX7d")

CREATE_V2_DISCRIMINATOR = 20


class Key(IntEnum):
    """Account discriminator (first byte of every Core account)."""

    UNINITIALIZED = 0
    ASSET_V1 = 1
    HASHED_ASSET_V1 = 2
    PLUGIN_HEADER_V1 = 3
    PLUGIN_REGISTRY_V1 = 4
    COLLECTION_V1 = 5


class DataState(IntEnum):
    ACCOUNT_STATE = 0
    LEDGER_STATE = 1


class HookableLifecycleEvent(IntEnum):
    CREATE = 0
    TRANSFER = 1
    BURN = 2
    UPDATE = 3


class CheckResult(IntFlag):
    """ExternalCheckResult flags."""

    CAN_LISTEN = 1 << 0
    CAN_APPROVE = 1 << 1
    CAN_REJECT = 1 << 2


class ValidationResultsOffset(IntEnum):
    NO_OFFSET = 0
    ANCHOR = 1


# ExternalPluginAdapterInitInfo variant index
ORACLE_INIT_INFO = 1


# ============================================================================
# Borsh primitives
# ============================================================================


def encode_u8(value: int) -> bytes:
    return value.to_bytes(1, "little")


def encode_u32(value: int) -> bytes:
    return value.to_bytes(4, "little")


def encode_string(value: str) -> bytes:
    raw = value.encode("utf-8")
    return encode_u32(len(raw)) + raw


def encode_option(value: Optional[bytes]) -> bytes:
    """Encode an already-serialized optional value."""
    if value is None:
        return b"\x00"
    return b"\x01" + value


def encode_vec(items: list[bytes]) -> bytes:
    return encode_u32(len(items)) + b"".join(items)


def read_u32(data: bytes, offset: int) -> tuple[int, int]:
    """Read u32, return (value, new_offset)."""
    if offset + 4 > len(data):
        raise ValueError("Unexpected end of account data")
    return int.from_bytes(data[offset : offset + 4], "little"), offset + 4


def read_string(data: bytes, offset: int) -> tuple[str, int]:
    """Read a Borsh string, return (value, new_offset)."""
    length, offset = read_u32(data, offset)
    if offset + length > len(data):
        raise ValueError("Unexpected end of account data")
    return data[offset : offset + length].decode("utf-8"), offset + length


# ============================================================================
# Accounts
# ============================================================================


@dataclass
class CollectionV1:
    """Decoded CollectionV1 base account (plugins are not decoded)."""

    address: Pubkey
    update_authority: Pubkey
    name: str
    uri: str
    num_minted: int
    current_size: int


def decode_collection(address: Pubkey, data: bytes) -> CollectionV1:
    """
    Decode CollectionV1 account data.

    Layout: key u8 | update_authority [32] | name string | uri string |
    num_minted u32 | current_size u32 | (plugin header...)
    """
    if not data or data[0] != Key.COLLECTION_V1:
        raise ValueError(f"Account {address} is not a CollectionV1 account")
    if len(data) < 33:
        raise ValueError("Unexpected end of account data")

    update_authority = Pubkey.from_bytes(data[1:33])
    name, offset = read_string(data, 33)
    uri, offset = read_string(data, offset)
    num_minted, offset = read_u32(data, offset)
    current_size, offset = read_u32(data, offset)

    return CollectionV1(
        address=address,
        update_authority=update_authority,
        name=name,
        uri=uri,
        num_minted=num_minted,
        current_size=current_size,
    )


# ============================================================================
# Plugins
# ============================================================================


@dataclass
class OraclePlugin:
    """
    Oracle external plugin adapter.

    The oracle account at `base_address` holds the validation results; with
    `CAN_REJECT` on `TRANSFER` the program refuses a transfer whenever the
    oracle says so.
    """

    base_address: Pubkey
    lifecycle_checks: list[tuple[HookableLifecycleEvent, CheckResult]] = field(
        default_factory=lambda: [(HookableLifecycleEvent.TRANSFER, CheckResult.CAN_REJECT)]
    )
    results_offset: ValidationResultsOffset = ValidationResultsOffset.ANCHOR

    def encode(self) -> bytes:
        checks = [
            encode_u8(event) + encode_u32(int(result))
            for event, result in self.lifecycle_checks
        ]
        return (
            encode_u8(ORACLE_INIT_INFO)
            + bytes(self.base_address)
            + encode_option(None)  # init_plugin_authority
            + encode_vec(checks)
            + encode_option(None)  # base_address_config
            + encode_option(encode_u8(self.results_offset))
        )


def soulbound_oracle(oracle_address: Pubkey) -> OraclePlugin:
    """Oracle plugin that may reject transfers."""
    return OraclePlugin(base_address=oracle_address)


# ============================================================================
# Instructions
# ============================================================================


def _optional_account(
    pubkey: Optional[Pubkey], is_signer: bool = False, is_writable: bool = False
) -> AccountMeta:
    # Omitted optional accounts are passed as the program id.
    if pubkey is None:
        return AccountMeta(MPL_CORE_PROGRAM_ID, is_signer=False, is_writable=False)
    return AccountMeta(pubkey, is_signer=is_signer, is_writable=is_writable)


def encode_create_v2_args(
    name: str,
    uri: str,
    external_plugins: list[OraclePlugin],
    data_state: DataState = DataState.ACCOUNT_STATE,
) -> bytes:
    """Serialize CreateV2 instruction data."""
    return (
        encode_u8(CREATE_V2_DISCRIMINATOR)
        + encode_u8(data_state)
        + encode_string(name)
        + encode_string(uri)
        + encode_option(encode_vec([]))  # plugins
        + encode_option(encode_vec([p.encode() for p in external_plugins]))
    )


def create_v2(
    *,
    asset: Pubkey,
    payer: Pubkey,
    name: str,
    uri: str,
    collection: Optional[Pubkey] = None,
    authority: Optional[Pubkey] = None,
    owner: Optional[Pubkey] = None,
    update_authority: Optional[Pubkey] = None,
    external_plugins: Optional[list[OraclePlugin]] = None,
) -> Instruction:
    """
    Build a CreateV2 instruction.

    `asset` and `payer` must sign the transaction, as must `authority` when
    given. When `collection` is set the collection's update authority governs
    the asset, so `update_authority` must be left unset.
    """
    if collection is not None and update_authority is not None:
        raise ValueError("update_authority cannot be set when minting into a collection")

    accounts = [
        AccountMeta(asset, is_signer=True, is_writable=True),
        _optional_account(collection, is_writable=True),
        _optional_account(authority, is_signer=True),
        AccountMeta(payer, is_signer=True, is_writable=True),
        _optional_account(owner),
        _optional_account(update_authority),
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        _optional_account(None),  # log_wrapper
    ]
    data = encode_create_v2_args(name, uri, external_plugins or [])
    return Instruction(MPL_CORE_PROGRAM_ID, data, accounts)
