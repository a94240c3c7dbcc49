import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notifier import __version__
from notifier.channels.client import DiscordClient
from notifier.config import settings
from notifier.database import engine, init_db
from notifier.middleware import RequestSizeLimitMiddleware, SecurityHeadersMiddleware
from notifier.routers import users, webhooks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        await init_db()

    app.state.chat_client = None
    try:
        if settings.enable_discord:
            client = DiscordClient(
                token=settings.discord_token,
                channel_id=settings.discord_channel_id,
                api_url=settings.discord_api_url,
                timeout=settings.discord_timeout,
            )
            await client.start()
            app.state.chat_client = client
        else:
            logger.info("Discord delivery disabled, notifications will only be logged")

        yield

        if app.state.chat_client is not None:
            await app.state.chat_client.close()
    finally:
        await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Relay Overseerr webhook notifications to a Discord channel.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)


# --- Exception Handlers ---


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.status_code, "message": exc.detail}},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        clean = {k: v for k, v in err.items() if k != "ctx"}
        if "msg" in clean:
            clean["msg"] = str(clean["msg"])
        errors.append(clean)
    return JSONResponse(
        status_code=422,
        content={"error": {"code": 422, "message": "Validation error", "details": errors}},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": {"code": 500, "message": "Internal server error"}},
    )


# --- Routes ---

app.include_router(webhooks.router)
app.include_router(users.router)
app.include_router(users.resolve_router)


@app.get("/", summary="API root")
async def root():
    return {"name": settings.app_name, "status": "ok", "version": __version__}


@app.get("/health", response_class=PlainTextResponse, summary="Health check")
async def health():
    return "OK"


@app.api_route("/test", methods=["GET", "POST"], response_class=PlainTextResponse, summary="Test endpoint")
async def test_endpoint(request: Request):
    logger.info("Test endpoint hit with method %s", request.method)
    return "Test successful"
