"""
Configuration for the Soulbound Mint API.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .catalog import CatalogEntry


class Settings(BaseSettings):
    """
    API configuration settings.

    All settings can be overridden via environment variables (or a .env file).
    Addresses and the signing credential are kept as raw strings here and only
    parsed when a mint runs, so a bad value fails that request instead of the
    whole process.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Server
    host: str = Field(default="0.0.0.0", description="API host")
    port: int = Field(default=5000, description="API port")
    debug: bool = Field(default=False, description="Enable auto-reload")
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        description="CORS allowed origins",
    )

    # Authentication
    # SECURITY: when MINT_API_SECRET is unset every /mint call is rejected.
    mint_api_secret: Optional[str] = Field(
        default=None,
        description="Shared secret expected in the x-api-secret header",
    )

    # Solana
    rpc_endpoint: str = Field(
        default="https://api.devnet.solana.com",
        description="Solana JSON-RPC endpoint",
    )
    commitment: str = Field(
        default="confirmed",
        description="Commitment level used for reads and confirmation",
    )
    wallet_secret_base64: Optional[str] = Field(
        default=None,
        description="base64 of a JSON array holding the 64-byte signer secret key",
    )

    # Metaplex Core
    collection_address: Optional[str] = Field(
        default=None,
        description="Parent collection every minted asset joins",
    )
    oracle_address: Optional[str] = Field(
        default=None,
        description="Oracle account that can reject transfers",
    )

    # Item catalog
    # ITEM_CATALOG takes precedence over the legacy NAME_*/URI_* pairs.
    item_catalog: list[CatalogEntry] = Field(
        default_factory=list,
        description="Ordered JSON list of {prefix, name, uri} entries",
    )
    name_king_bonk: Optional[str] = None
    uri_king_bonk: Optional[str] = None
    prefix_king_bonk: Optional[str] = None
    name_the_bonk: Optional[str] = None
    uri_the_bonk: Optional[str] = None
    prefix_the_bonk: Optional[str] = None
    name_monke: Optional[str] = None
    uri_monke: Optional[str] = None
    prefix_monke: Optional[str] = None

    # Explorer links
    explorer_base_url: str = Field(
        default="https://explorer.solana.com/address",
        description="Base URL the minted address is appended to",
    )
    explorer_cluster: Optional[str] = Field(
        default=None,
        description="Optional ?cluster= value (e.g. devnet)",
    )

    def catalog_entries(self) -> list[CatalogEntry]:
        """Catalog entries in match order."""
        if self.item_catalog:
            return list(self.item_catalog)

        legacy = [
            (self.prefix_king_bonk, self.name_king_bonk, self.uri_king_bonk),
            (self.prefix_the_bonk, self.name_the_bonk, self.uri_the_bonk),
            (self.prefix_monke, self.name_monke, self.uri_monke),
        ]
        return [
            CatalogEntry(prefix=prefix, name=name, uri=uri)
            for prefix, name, uri in legacy
            if name and uri
        ]

    def explorer_url(self, address: str) -> str:
        """Block explorer link for an address."""
        url = f"{self.explorer_base_url.rstrip('/')}/{address}"
        if self.explorer_cluster:
            url += f"?cluster={self.explorer_cluster}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
