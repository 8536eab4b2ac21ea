from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import structlog

from app.config import get_settings
from app.log import configure_logging
from app.api.middleware import verify_vapi_secret
from app.api.routes import hubspot, properties

logger = structlog.get_logger()

SERVICE_NAME = "Real Estate Voice Assistant"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level, debug=settings.debug)
    logger.info(
        "Starting Real Estate Voice Assistant...",
        vapi_auth_enabled=settings.vapi_auth_enabled,
        hubspot_configured=bool(settings.hubspot_access_token),
    )
    yield
    # Shutdown
    logger.info("Shutting down Real Estate Voice Assistant...")


app = FastAPI(
    title=SERVICE_NAME,
    description="Tool-call backend for a Vapi real estate assistant, synced to HubSpot",
    version=VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=request.method, path=request.url.path)
    return await call_next(request)


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, error=str(exc))
    content = {"error": "Internal Server Error"}
    if get_settings().debug:
        content["message"] = str(exc)
    return JSONResponse(status_code=500, content=content)


# Routes
vapi_auth = [Depends(verify_vapi_secret)]

app.include_router(hubspot.public_router, prefix="/api/public/hubspot", tags=["hubspot"])
app.include_router(
    properties.router, prefix="/api/vapi/property", tags=["property"], dependencies=vapi_auth
)
app.include_router(
    hubspot.public_router, prefix="/api/vapi/hubspot", tags=["hubspot"], dependencies=vapi_auth
)
app.include_router(
    hubspot.router, prefix="/api/vapi/hubspot", tags=["hubspot"], dependencies=vapi_auth
)


@app.get("/")
async def root():
    return {"message": f"{SERVICE_NAME} API", "version": VERSION}


@app.get("/health")
async def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
