"""
Soulbound Mint API - HTTP front door for minting soulbound assets on Solana.

Provides REST endpoints for:
- Minting a soulbound Metaplex Core asset (POST /mint)
- Health checks (GET /health)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .auth import verify_api_secret
from .config import Settings, get_settings
from .errors import APIError, BadRequestError, MintError
from .minter import SoulboundMinter
from .models import ErrorResponse, HealthResponse, MintRequest, MintResponse
from .solana_client import SolanaClient

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger()


# Global client (initialized at startup)
_solana_client: SolanaClient | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    global _solana_client

    settings = get_settings()
    _solana_client = SolanaClient(settings)

    logger.info(
        "API started",
        version=__version__,
        host=settings.host,
        port=settings.port,
        rpc_endpoint=settings.rpc_endpoint,
        collection=settings.collection_address,
        catalog_items=len(settings.catalog_entries()),
    )

    yield

    # Cleanup
    if _solana_client:
        await _solana_client.close()
        _solana_client = None

    logger.info("API stopped")


def get_solana_client() -> Optional[SolanaClient]:
    """Shared Solana client (None before startup)."""
    return _solana_client


# Create FastAPI app
app = FastAPI(
    title="Soulbound Mint API",
    description="Mints soulbound Metaplex Core assets on Solana",
    version=__version__,
    lifespan=lifespan,
)


# Add CORS middleware
_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Exception Handlers
# ============================================================================


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Render request rejections as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparseable or mistyped bodies get the same 400 as missing fields."""
    rejection = BadRequestError()
    return JSONResponse(
        status_code=rejection.status_code,
        content=ErrorResponse(error=rejection.message).model_dump(),
    )


# ============================================================================
# Health Check
# ============================================================================


@app.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_settings),
    client: Optional[SolanaClient] = Depends(get_solana_client),
) -> HealthResponse:
    """
    Check API health and RPC connectivity.

    Unauthenticated so it can be used by monitors.
    """
    solana_ok = False
    if client:
        solana_ok = await client.check_connectivity()

    return HealthResponse(
        status="ok" if solana_ok else "degraded",
        version=__version__,
        solana_rpc=solana_ok,
        collection=settings.collection_address,
    )


# ============================================================================
# Mint
# ============================================================================


@app.post(
    "/mint",
    response_model=MintResponse,
    response_model_exclude_none=True,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MintResponse},
    },
    dependencies=[Depends(verify_api_secret)],
)
async def mint(
    request: MintRequest,
    settings: Settings = Depends(get_settings),
    client: Optional[SolanaClient] = Depends(get_solana_client),
) -> JSONResponse:
    """
    Mint a soulbound asset to `wallet` for the catalog item matching `itemName`.

    Every minting failure (configuration, unknown item, RPC, program error)
    is reported as a 500 with the underlying message.
    """
    if not request.wallet or not request.item_name:
        raise BadRequestError()

    try:
        if client is None:
            raise MintError("Solana client not initialized")

        minter = SoulboundMinter(settings, client)
        result = await minter.mint(request.wallet, request.item_name)

    except Exception as e:
        logger.error("Error minting NFT", error=str(e), item_name=request.item_name)
        response = MintResponse(success=False, error=f"Error minting NFT: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.model_dump(by_alias=True, exclude_none=True),
        )

    response = MintResponse(
        success=True,
        mint=result.mint,
        item_name=request.item_name,
        explorer=settings.explorer_url(result.mint),
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=response.model_dump(by_alias=True, exclude_none=True),
    )

