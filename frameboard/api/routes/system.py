from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from frameboard.db.session import get_db

router = APIRouter(tags=["system"])


@router.get("/", response_class=PlainTextResponse)
async def index():
    return "Hello from Frameboard!"


@router.api_route("/api/health", methods=["GET", "HEAD"])
async def health(db: AsyncSession = Depends(get_db)):
    status = {
        "api": "ok",
        "database": None,
    }
    http_status = 200

    try:
        await db.execute(text("SELECT 1"))
        status["database"] = "connected"
    except Exception as e:
        status["database"] = f"error: {e}"
        http_status = 503

    return JSONResponse(content=status, status_code=http_status)
