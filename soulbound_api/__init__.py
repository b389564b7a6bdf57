"""
Soulbound Mint API - HTTP front door for minting soulbound Metaplex Core assets.

Provides REST endpoints for:
- Minting a transfer-restricted asset into a collection (POST /mint)
- Health checks (GET /health)
"""

__version__ = "0.1.0"
