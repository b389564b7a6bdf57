"""
Pydantic models for API requests and responses.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Mint
# ============================================================================

class MintRequest(BaseModel):
    """Request to mint a soulbound asset.

    Both fields are optional at parse time; the route rejects missing or
    empty values with a 400 rather than a schema error. Only the camelCase
    `itemName` key is read from the body.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "wallet": "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin",
                    "itemName": "King Bonk #12",
                }
            ]
        },
    )

    wallet: Optional[str] = Field(None, description="Owner wallet address (base58)")
    item_name: Optional[str] = Field(None, alias="itemName", description="Catalog item name")


class MintResponse(BaseModel):
    """Response from a mint."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(..., description="Whether the asset was minted")
    mint: Optional[str] = Field(None, description="New asset address")
    item_name: Optional[str] = Field(None, alias="itemName", description="Requested item name")
    explorer: Optional[str] = Field(None, description="Block explorer link for the asset")
    error: Optional[str] = Field(None, description="Error message if failed")


class ErrorResponse(BaseModel):
    """Request rejected before minting."""

    error: str = Field(..., description="Reason the request was rejected")


# ============================================================================
# Health Check
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    solana_rpc: bool = Field(..., description="Solana RPC connectivity")
    collection: Optional[str] = Field(None, description="Configured collection address")
