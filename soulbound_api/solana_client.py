"""
Solana client for submitting Metaplex Core transactions.
"""

from typing import Optional, Sequence

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.types import TxOpts
from solders.account import Account
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from .config import Settings
from .errors import TransactionFailedError


class SolanaClient:
    """
    Async Solana RPC client.

    One instance is shared by all requests; it holds no per-request state.
    """

    def __init__(self, settings: Settings):
        self.commitment = Commitment(settings.commitment)
        self.rpc = AsyncClient(settings.rpc_endpoint, commitment=self.commitment)

    async def check_connectivity(self) -> bool:
        """Check if the RPC node is reachable."""
        try:
            return await self.rpc.is_connected()
        except Exception:
            return False

    async def get_account(self, address: Pubkey) -> Optional[Account]:
        """Fetch an account, None if it does not exist."""
        resp = await self.rpc.get_account_info(address, commitment=self.commitment)
        return resp.value

    async def send_and_confirm(
        self,
        instructions: Sequence[Instruction],
        payer: Keypair,
        signers: Sequence[Keypair] = (),
    ) -> Signature:
        """
        Sign, send and wait for confirmation of a legacy transaction.

        Raises:
            TransactionFailedError: if the transaction confirmed with an error
        """
        latest = await self.rpc.get_latest_blockhash(commitment=self.commitment)
        blockhash = latest.value.blockhash

        message = Message.new_with_blockhash(list(instructions), payer.pubkey(), blockhash)
        tx = Transaction([payer, *signers], message, blockhash)

        resp = await self.rpc.send_transaction(
            tx,
            opts=TxOpts(skip_confirmation=True, preflight_commitment=self.commitment),
        )
        signature = resp.value

        confirmed = await self.rpc.confirm_transaction(
            signature,
            commitment=self.commitment,
            last_valid_block_height=latest.value.last_valid_block_height,
        )
        status = confirmed.value[0] if confirmed.value else None
        if status is not None and status.err is not None:
            raise TransactionFailedError(f"Transaction {signature} failed: {status.err}")

        return signature

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.rpc.close()
