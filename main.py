"""
Sheet Responder service

Twilio posts inbound WhatsApp messages to /webhook/whatsapp and gets a
TwiML reply built from the Orders and Inventory sheets.

Run: uvicorn main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Config
from infra.bootstrap import bootstrap_infrastructure
from transport.whatsapp import method_not_allowed_handler, router as whatsapp_router

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the data source once and report what is missing."""
    infra = bootstrap_infrastructure()
    logger.info(f"Sheet Responder starting ({Config.ENVIRONMENT}), {infra!r}")
    missing = Config.missing_settings()
    if missing:
        logger.warning(f"Missing configuration: {', '.join(missing)}")

    yield

    logger.info("Sheet Responder shutting down")


app = FastAPI(
    title="Sheet Responder API",
    description="WhatsApp order and inventory lookups backed by Google Sheets",
    version="1.0.0",
    lifespan=lifespan,
)
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)
app.include_router(whatsapp_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


@app.get("/health/live")
async def health_live():
    """Process is up."""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready():
    """Ready once the selected sheets backend is fully configured."""
    try:
        missing = Config.missing_settings()
    except ValueError as e:
        return {"status": "not_ready", "reason": str(e)}
    if missing:
        return {"status": "not_ready", "reason": f"missing: {', '.join(missing)}"}
    return {"status": "ready"}


@app.get("/")
async def root():
    return {
        "name": "Sheet Responder API",
        "version": "1.0.0",
        "endpoints": {
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
