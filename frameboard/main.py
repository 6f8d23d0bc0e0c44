import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from frameboard.core.config import configure_logging, get_settings
from frameboard.core.services import init_services
from frameboard.db.base import Base
from frameboard.db.session import engine
from frameboard.api.routes import auth, boards, embed, system

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")

    app.state.http = httpx.AsyncClient(timeout=10.0)
    for name, service in init_services(settings, app.state.http).items():
        setattr(app.state, name, service)
    logger.info("External services initialized")

    yield  # App runs here

    await app.state.http.aclose()
    await engine.dispose()
    logger.info("Shutting down...")


app = FastAPI(
    title="Frameboard API",
    version="0.1",
    lifespan=lifespan,
)

if settings.app_env.lower() == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS allowed for development environment")
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        content={"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(content={"error": message}, status_code=422)


# API routes
app.include_router(system.router)
app.include_router(auth.router)
app.include_router(boards.router)
app.include_router(embed.router)
