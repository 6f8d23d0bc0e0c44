import logging
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from frameboard.db.models import Board, BoardImage

logger = logging.getLogger(__name__)


def build_images(
    image_urls: Sequence[str],
    captions: Optional[Sequence[str]],
    fid: int,
) -> List[BoardImage]:
    """One image per URL, paired positionally with captions ("" where none is given)."""
    captions = captions or []
    return [
        BoardImage(
            image_url=url,
            caption=captions[i] if i < len(captions) else "",
            fid=fid,
        )
        for i, url in enumerate(image_urls)
    ]


async def create_board(
    db: AsyncSession,
    name: str,
    owner_fid: int,
    slug: str,
    image_urls: Sequence[str],
    captions: Optional[Sequence[str]] = None,
) -> Board:
    """Insert a board and its images in a single transaction."""
    board = Board(name=name, fid=owner_fid, slug=slug)
    board.board_images = build_images(image_urls, captions, owner_fid)
    db.add(board)

    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise

    logger.info(
        f"Created board {board.id} '{slug}' for fid {owner_fid} "
        f"with {len(image_urls)} images"
    )
    return board


async def list_boards(db: AsyncSession, fid: int) -> Sequence[Board]:
    """All boards owned by `fid`, most recent first."""
    result = await db.execute(
        select(Board)
        .where(Board.fid == fid)
        .options(selectinload(Board.board_images))
        .order_by(Board.id.desc())
    )
    return result.scalars().all()


async def get_board_by_slug(db: AsyncSession, slug: str) -> Optional[Board]:
    result = await db.execute(
        select(Board)
        .where(Board.slug == slug)
        .options(selectinload(Board.board_images))
    )
    return result.scalar_one_or_none()
