"""
FastAPI Application Entry Point

Integrates:
  - WhatsApp webhook handler
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --reload --host 0.0.0.0 --port 5123
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import Config
from webhook import whatsapp_router

# Setup logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.
    """
    # Startup
    logger.info("=" * 60)
    logger.info("Wallet bot starting up...")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    logger.info(f"WalletKit API: {Config.WALLET_KIT_API_URL or '(not set)'}")
    logger.info(f"Fiat ramp API: {Config.FIAT_RAMP_API_URL or '(not set)'}")
    if not Config.validate():
        logger.warning("Configuration incomplete, vendor calls will fail")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("Wallet bot shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Wallet Bot API",
    description="WhatsApp bot for custodial crypto wallets and fiat on/off-ramp",
    version="1.0.0",
    lifespan=lifespan,
)


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )


# Include routers
app.include_router(whatsapp_router)


# Health check endpoints
@app.get("/health/live")
async def health_live():
    """Live health check (Kubernetes liveness probe)."""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready():
    """Readiness health check (Kubernetes readiness probe)."""
    if Config.validate():
        return {"status": "ready"}
    return {"status": "not_ready", "missing": Config.missing()}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Wallet Bot API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "whatsapp_verify": "GET /webhook/whatsapp",
            "whatsapp_webhook": "POST /webhook/whatsapp",
            "whatsapp_health": "GET /webhook/whatsapp/health",
            "health_live": "GET /health/live",
            "health_ready": "GET /health/ready",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=Config.PORT,
        reload=Config.ENVIRONMENT == "development",
    )
