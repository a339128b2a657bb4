"""FastAPI application serving the exchange.

Note: Authentication is intentionally not implemented. ``sender`` fields are
taken at face value; the API is meant for local simulation and testing.
"""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dex import __version__
from dex.api.endpoints import router
from dex.api.schemas import ErrorResponse
from dex.config import ServerConfig
from dex.errors import DexError, UnknownContract
from dex.log import configure_logging
from dex.safe_int import SafeIntError

SERVER_CONFIG = ServerConfig.from_env()

app = FastAPI(
    title="DEX",
    description="Constant-product exchange: pair registry, pools and liquidity tokens",
    version=__version__,
)


@app.exception_handler(DexError)
async def dex_error_handler(_request: Request, exc: DexError) -> JSONResponse:
    """Reverted calls become 400s carrying the error reason (404 for unknown contracts)."""
    status_code = 404 if isinstance(exc, UnknownContract) else 400
    body = ErrorResponse(reason=exc.reason, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(SafeIntError)
async def arithmetic_error_handler(_request: Request, exc: SafeIntError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(reason=f"Arithmetic__{type(exc).__name__}", detail=str(exc)).model_dump(),
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the exchange API server.

    Configuration via environment variables:
    - DEX_HOST: Host to bind to (default: 0.0.0.0)
    - DEX_PORT: Port to bind to (default: 8000)
    - DEX_DEBUG: Enable debug logging and reload mode (default: false)
    - DEX_LOCAL_TOKENS: Deploy ThunderToken/CloudToken mocks (default: true)
    - DEX_FEE_PERCENTAGE: Swap fee in percent (default: 3)
    """
    configure_logging(debug=SERVER_CONFIG.debug)
    uvicorn.run(
        "dex.api.main:app",
        host=SERVER_CONFIG.host,
        port=SERVER_CONFIG.port,
        reload=SERVER_CONFIG.debug,
    )


if __name__ == "__main__":
    run()
