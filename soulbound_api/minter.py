"""
Soulbound minting workflow.

Flow:
    1. Decode the minting wallet secret from configuration
    2. Use the shared RPC session
    3. Bind the minting wallet as payer and collection authority
    4. Generate a fresh keypair for the new asset's address
    5. Fetch the parent collection account
    6. Resolve display name / metadata URI from the item catalog
    7. Send CreateV2 with an Oracle plugin that can reject transfers, wait
       for confirmation
    8. Return the asset address

Any failure aborts the call. Nothing is written locally, so there is nothing
to roll back; the transaction either lands or it doesn't.
"""

from dataclasses import dataclass

import structlog
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .catalog import ItemCatalog
from .config import Settings
from .credentials import load_signer, parse_address
from .errors import CollectionNotFoundError, MintError
from .mpl_core import MPL_CORE_PROGRAM_ID, CollectionV1, create_v2, decode_collection, soulbound_oracle
from .solana_client import SolanaClient

logger = structlog.get_logger()


@dataclass(frozen=True)
class MintResult:
    """Outcome of a confirmed mint."""

    mint: str
    signature: str
    name: str
    uri: str
    collection: str


class SoulboundMinter:
    """
    Mints soulbound assets into the configured collection.

    Stateless apart from the read-only settings and RPC session, so one
    instance may serve concurrent requests.
    """

    def __init__(self, settings: Settings, client: SolanaClient):
        self.settings = settings
        self.client = client
        self.catalog = ItemCatalog(settings.catalog_entries())

    async def fetch_collection(self, address: Pubkey) -> CollectionV1:
        """Fetch and decode the parent collection."""
        account = await self.client.get_account(address)
        if account is None:
            raise CollectionNotFoundError(
                f"The account of type [CollectionV1] was not found at the provided address [{address}]"
            )
        if account.owner != MPL_CORE_PROGRAM_ID:
            raise CollectionNotFoundError(
                f"Account {address} is not owned by the Metaplex Core program"
            )
        try:
            return decode_collection(address, bytes(account.data))
        except ValueError as e:
            raise CollectionNotFoundError(str(e)) from e

    async def mint(self, wallet: str, item_name: str) -> MintResult:
        """Mint one soulbound asset owned by `wallet`."""
        signer = load_signer(self.settings.wallet_secret_base64)
        collection_address = parse_address(self.settings.collection_address, "COLLECTION_ADDRESS")
        oracle_address = parse_address(self.settings.oracle_address, "ORACLE_ADDRESS")

        try:
            owner = Pubkey.from_string(wallet.strip())
        except ValueError:
            raise MintError(f"Invalid wallet address: {wallet}") from None

        asset = Keypair()

        collection = await self.fetch_collection(collection_address)
        item = self.catalog.resolve(item_name)

        instruction = create_v2(
            asset=asset.pubkey(),
            collection=collection.address,
            authority=signer.pubkey(),
            payer=signer.pubkey(),
            owner=owner,
            name=item.name,
            uri=item.uri,
            external_plugins=[soulbound_oracle(oracle_address)],
        )

        signature = await self.client.send_and_confirm([instruction], payer=signer, signers=[asset])

        logger.info(
            "NFT minted",
            mint=str(asset.pubkey()),
            item_name=item_name,
            collection=str(collection.address),
            signature=str(signature),
        )

        return MintResult(
            mint=str(asset.pubkey()),
            signature=str(signature),
            name=item.name,
            uri=item.uri,
            collection=str(collection.address),
        )
