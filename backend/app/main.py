from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# -------------------------------------------------
# Internal services
# -------------------------------------------------
from backend.app.api.completion_routes import router as completion_router
from backend.app.api.data_routes import router as data_router
from backend.app.api.deps import get_gateway
from backend.app.api.vacancy_routes import router as vacancy_router
from backend.app.config import get_settings
from backend.app.logging_config import create_logger
from backend.app.services.gateway_errors import GatewayError
from backend.app.services.openai_status import openai_status

APP_VERSION = "0.3.0"

settings = get_settings()
logger = create_logger(log_level=settings.log_level)

# -------------------------------------------------
# FastAPI app
# -------------------------------------------------
app = FastAPI(title="HR Assist API", version=APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allow_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.warning("%s %s -> %s (%d)", request.method, request.url.path, exc.code, exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# -------------------------------------------------
# Startup
# -------------------------------------------------
@app.on_event("startup")
def startup() -> None:
    gateway = get_gateway()
    if gateway.client is None:
        logger.warning("OPENAI_API_KEY is not set; /api/openai will answer 500")
    logger.info("HR Assist API %s started (model=%s)", APP_VERSION, settings.openai_model)


# -------------------------------------------------
# Health & system
# -------------------------------------------------
@app.get("/health")
def health():
    return {"ok": True}


@app.get("/system/openai-status")
def system_openai():
    return openai_status(settings)


# -------------------------------------------------
# Routers
# -------------------------------------------------
app.include_router(completion_router, prefix="/api", tags=["completion"])
app.include_router(data_router, prefix="/data", tags=["data"])
app.include_router(vacancy_router, prefix="/api/vacancy", tags=["vacancy"])
