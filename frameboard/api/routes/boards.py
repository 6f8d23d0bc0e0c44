import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from frameboard.core.auth import (
    SignInVerifier,
    get_sign_in_proof,
    get_verifier,
    require_fid,
    verify_proof,
)
from frameboard.core.config import Settings, get_settings
from frameboard.db import crud
from frameboard.db.session import get_db, datastore_error_message
from frameboard.schemas.board import BoardCreate, BoardRead, StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["boards"])


@router.post("/boards", response_model=StatusResponse)
async def create_board(
    board: BoardCreate,
    fid: int = Depends(require_fid),
    db: AsyncSession = Depends(get_db),
):
    """Create a board and its images for the signed-in fid."""
    if board.fid is not None and board.fid != fid:
        logger.warning(f"Ignoring client-supplied fid {board.fid}, signed in as {fid}")

    try:
        await crud.create_board(
            db,
            name=board.board_name,
            owner_fid=fid,
            slug=board.slug,
            image_urls=board.image_links,
            captions=board.captions,
        )
    except SQLAlchemyError as e:
        logger.error(f"Board creation failed for slug '{board.slug}'", exc_info=True)
        raise HTTPException(status_code=500, detail=datastore_error_message(e))

    return {"status": "ok"}


async def _boards_for(db: AsyncSession, fid: int):
    try:
        return await crud.list_boards(db, fid)
    except SQLAlchemyError as e:
        logger.error(f"Listing boards failed for fid {fid}", exc_info=True)
        raise HTTPException(status_code=500, detail=datastore_error_message(e))


@router.get("/boards", response_model=list[BoardRead])
async def list_my_boards(
    fid: int = Depends(require_fid),
    db: AsyncSession = Depends(get_db),
):
    """List the signed-in fid's boards; proof sent as headers."""
    return await _boards_for(db, fid)


@router.post("/list-boards", response_model=list[BoardRead])
async def list_my_boards_post(
    fid: int = Depends(require_fid),
    db: AsyncSession = Depends(get_db),
):
    """List the signed-in fid's boards; proof sent in the body."""
    return await _boards_for(db, fid)


@router.get("/boards/{fid}", response_model=list[BoardRead])
async def list_boards_by_fid(
    fid: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
    verifier: SignInVerifier = Depends(get_verifier),
    settings: Settings = Depends(get_settings),
):
    """List any fid's boards, or only your own when PUBLIC_BOARDS_BY_FID is off."""
    if not settings.public_boards_by_fid:
        proof = await get_sign_in_proof(request)
        verified_fid = await verify_proof(proof, verifier, settings)
        if verified_fid != fid:
            raise HTTPException(status_code=403, detail="Forbidden")

    return await _boards_for(db, fid)


@router.get("/board/{slug}", response_model=BoardRead)
async def get_board(
    slug: str,
    db: AsyncSession = Depends(get_db),
):
    """Fetch a single board by slug along with its images."""
    try:
        board = await crud.get_board_by_slug(db, slug)
    except SQLAlchemyError as e:
        logger.error(f"Board lookup failed for slug '{slug}'", exc_info=True)
        raise HTTPException(status_code=500, detail=datastore_error_message(e))

    if not board:
        raise HTTPException(status_code=404, detail="Board not found")

    return board
