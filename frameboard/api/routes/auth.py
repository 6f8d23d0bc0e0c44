import logging

from fastapi import APIRouter, Depends, HTTPException

from frameboard.core.auth import (
    SignInVerifier,
    get_verifier,
    require_fid,
    verify_proof,
)
from frameboard.core.config import Settings, get_settings
from frameboard.core.services import StorageClient, StorageError, get_storage
from frameboard.schemas.auth import PresignedUrl, SignInProof, VerifyResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/verify", response_model=VerifyResponse)
async def verify(
    proof: SignInProof,
    verifier: SignInVerifier = Depends(get_verifier),
    settings: Settings = Depends(get_settings),
):
    """Check a sign-in proof and return the fid it belongs to."""
    fid = await verify_proof(proof, verifier, settings)
    return {"status": "ok", "fid": fid}


async def _signed_url(storage: StorageClient, settings: Settings, fid: int):
    try:
        url = await storage.create_signed_url(expires=settings.signed_url_expires)
    except StorageError as e:
        logger.error(f"Signed URL request failed for fid {fid}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return {"url": url, "gateway": storage.gateway_url}


@router.get("/presigned_url", response_model=PresignedUrl)
async def presigned_url(
    fid: int = Depends(require_fid),
    storage: StorageClient = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Signed upload URL; proof sent as headers."""
    return await _signed_url(storage, settings, fid)


@router.post("/presigned_url", response_model=PresignedUrl)
async def presigned_url_post(
    fid: int = Depends(require_fid),
    storage: StorageClient = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Signed upload URL; proof sent in the body."""
    return await _signed_url(storage, settings, fid)
