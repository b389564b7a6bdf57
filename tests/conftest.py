"""
Shared fixtures: test settings and a fake Solana client.
"""

from types import SimpleNamespace
from typing import Optional, Sequence

import pytest
from fastapi.testclient import TestClient
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from soulbound_api.config import Settings, get_settings
from soulbound_api.credentials import encode_secret_key
from soulbound_api.main import app, get_solana_client
from soulbound_api.mpl_core import MPL_CORE_PROGRAM_ID, Key, encode_string, encode_u32

API_SECRET = "test-api-secret"


def collection_account_data(update_authority: Pubkey, name: str = "Bonk Collection", uri: str = "https://example.com/c.json") -> bytes:
    """Serialized CollectionV1 base account."""
    return (
        bytes([Key.COLLECTION_V1])
        + bytes(update_authority)
        + encode_string(name)
        + encode_string(uri)
        + encode_u32(3)
        + encode_u32(3)
    )


class FakeSolanaClient:
    """Stands in for SolanaClient; records what would have been sent."""

    def __init__(self, accounts: Optional[dict] = None):
        self.accounts = accounts or {}
        self.account_requests: list[Pubkey] = []
        self.sent: list[dict] = []
        self.get_account_error: Optional[Exception] = None
        self.send_error: Optional[Exception] = None

    async def check_connectivity(self) -> bool:
        return True

    async def get_account(self, address: Pubkey):
        self.account_requests.append(address)
        if self.get_account_error:
            raise self.get_account_error
        return self.accounts.get(address)

    async def send_and_confirm(
        self,
        instructions: Sequence[Instruction],
        payer: Keypair,
        signers: Sequence[Keypair] = (),
    ) -> Signature:
        if self.send_error:
            raise self.send_error
        self.sent.append(
            {"instructions": list(instructions), "payer": payer, "signers": list(signers)}
        )
        return Signature.default()

    async def close(self) -> None:
        return None


@pytest.fixture
def minting_keypair() -> Keypair:
    return Keypair()


@pytest.fixture
def collection_address() -> Pubkey:
    return Keypair().pubkey()


@pytest.fixture
def oracle_address() -> Pubkey:
    return Keypair().pubkey()


@pytest.fixture
def owner_wallet() -> str:
    return str(Keypair().pubkey())


@pytest.fixture
def settings(minting_keypair, collection_address, oracle_address) -> Settings:
    """Fully configured settings, isolated from any local .env."""
    return Settings(
        _env_file=None,
        mint_api_secret=API_SECRET,
        rpc_endpoint="http://localhost:8899",
        wallet_secret_base64=encode_secret_key(minting_keypair),
        collection_address=str(collection_address),
        oracle_address=str(oracle_address),
        name_king_bonk="King Bonk",
        uri_king_bonk="https://example.com/king-bonk.json",
        name_the_bonk="The Bonk",
        uri_the_bonk="https://example.com/the-bonk.json",
        name_monke="Monke",
        uri_monke="https://example.com/monke.json",
    )


@pytest.fixture
def fake_solana(minting_keypair, collection_address) -> FakeSolanaClient:
    collection = SimpleNamespace(
        owner=MPL_CORE_PROGRAM_ID,
        data=collection_account_data(minting_keypair.pubkey()),
    )
    return FakeSolanaClient(accounts={collection_address: collection})


@pytest.fixture
def client(settings, fake_solana):
    """Test client wired to the fake Solana client."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_solana_client] = lambda: fake_solana
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"x-api-secret": API_SECRET}
