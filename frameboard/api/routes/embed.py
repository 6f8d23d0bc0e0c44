import json
import logging
from html import escape
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from frameboard.core.config import Settings, get_settings
from frameboard.db import crud
from frameboard.db.models import Board
from frameboard.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["embed"])

EMBED_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{title}</title>
    <meta property="og:title" content="{title}" />
    <meta property="og:description" content="{description}" />
    <meta property="og:image" content="{site_image}" />
    <meta name="twitter:card" content="summary_large_image" />
    <meta name="twitter:title" content="{title}" />
    <meta name="twitter:description" content="{description}" />
    <meta name="twitter:image" content="{site_image}" />
    <meta name="fc:frame" content="{frame}" />
  </head>
  <body>
    <a href="{board_url}">{title}</a>
  </body>
</html>
"""


def preview_image_url(board: Optional[Board], fallback: str) -> str:
    if board and board.board_images:
        return board.board_images[0].image_url
    return fallback


def frame_payload(settings: Settings, slug: str, image_url: str) -> dict:
    return {
        "version": "next",
        "imageUrl": image_url,
        "button": {
            "title": settings.embed_button_title,
            "action": {
                "type": "launch_frame",
                "name": settings.embed_title,
                "url": board_url(settings, slug),
                "splashImageUrl": settings.embed_splash_image_url,
                "splashBackgroundColor": settings.embed_splash_background_color,
            },
        },
    }


def board_url(settings: Settings, slug: str) -> str:
    return f"{settings.app_url.rstrip('/')}/board/{quote(slug, safe='')}"


def render_embed(settings: Settings, slug: str, board: Optional[Board]) -> str:
    image_url = preview_image_url(board, settings.embed_fallback_image_url)
    return EMBED_TEMPLATE.format(
        title=escape(settings.embed_title),
        description=escape(settings.embed_description),
        site_image=escape(settings.embed_site_image_url),
        frame=escape(json.dumps(frame_payload(settings, slug, image_url))),
        board_url=escape(board_url(settings, slug)),
    )


@router.get("/embed/{slug}", response_class=HTMLResponse)
async def embed(
    slug: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Preview page for social cards; never fails on an unknown slug."""
    try:
        board = await crud.get_board_by_slug(db, slug)
    except SQLAlchemyError as e:
        logger.warning(f"Embed lookup failed for slug '{slug}': {e}")
        board = None

    return HTMLResponse(render_embed(settings, slug, board))
