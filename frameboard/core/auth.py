import re
import logging
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import unquote

import httpx
from fastapi import Depends, HTTPException, Request
from siwe import SiweMessage

from frameboard.core.config import Settings, get_settings
from frameboard.schemas.auth import SignInProof

logger = logging.getLogger(__name__)

PROOF_FIELDS = ("nonce", "message", "signature")
FID_RESOURCE = re.compile(r"^farcaster://fid/(\d+)/?$")


@dataclass
class VerifyResult:
    success: bool
    fid: Optional[int] = None
    error: Optional[str] = None


def fid_from_resources(resources: Optional[Iterable]) -> Optional[int]:
    """Pull the fid out of a `farcaster://fid/<n>` resource line."""
    for resource in resources or []:
        match = FID_RESOURCE.match(str(resource))
        if match:
            return int(match.group(1))
    return None


class SignInVerifier:
    """
    Checks a Sign In With Farcaster proof.

    The message must be a valid EIP-4361 message for the expected domain and
    nonce, signed by the address it names, and that address must be the
    custody address the hub reports for the fid the message claims.
    """

    def __init__(self, http_client: httpx.AsyncClient, hub_url: str):
        self.http_client = http_client
        self.hub_url = hub_url.rstrip("/")

    async def verify(
        self, nonce: str, domain: str, message: str, signature: str
    ) -> VerifyResult:
        try:
            siwe_message = SiweMessage.from_message(message=message)
            siwe_message.verify(signature, domain=domain, nonce=nonce)
        except Exception as e:
            logger.info(f"Sign-in message rejected: {e!r}")
            return VerifyResult(success=False, error=str(e) or type(e).__name__)

        fid = fid_from_resources(siwe_message.resources)
        if fid is None:
            return VerifyResult(success=False, error="Message has no fid resource")

        try:
            custody_fid = await self.custody_fid(siwe_message.address)
        except httpx.HTTPError as e:
            logger.error(f"Hub lookup failed for fid {fid}: {e}", exc_info=True)
            return VerifyResult(success=False, error=f"Hub lookup failed: {e}")

        if custody_fid != fid:
            return VerifyResult(
                success=False,
                error=f"{siwe_message.address} is not the custody address of fid {fid}",
            )

        return VerifyResult(success=True, fid=fid)

    async def custody_fid(self, address: str) -> Optional[int]:
        """Ask the hub which fid `address` holds custody of."""
        res = await self.http_client.get(
            f"{self.hub_url}/v1/onChainIdRegistryEventByAddress",
            params={"address": address},
        )
        if res.status_code == 404:
            return None
        res.raise_for_status()
        fid = res.json().get("fid")
        return int(fid) if fid is not None else None


def get_verifier(request: Request) -> SignInVerifier:
    return request.app.state.verifier


async def get_sign_in_proof(request: Request) -> SignInProof:
    """
    Read the proof from the JSON body, falling back to request headers.

    Header values cannot carry the newlines of a sign-in message, so the
    `message` header is percent-encoded by clients and decoded here.
    """
    fields = {name: request.headers.get(name) for name in PROOF_FIELDS}
    if fields["message"]:
        fields["message"] = unquote(fields["message"])

    if request.method != "GET":
        try:
            body = await request.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for name in PROOF_FIELDS:
                value = body.get(name)
                if isinstance(value, str) and value:
                    fields[name] = value
                elif value is not None:
                    fields[name] = None

    missing = [name for name in PROOF_FIELDS if not fields[name]]
    if missing:
        raise HTTPException(
            status_code=401,
            detail=f"Missing or invalid sign-in fields: {', '.join(missing)}",
        )
    return SignInProof(**fields)


async def verify_proof(
    proof: SignInProof, verifier: SignInVerifier, settings: Settings
) -> int:
    """Return the verified fid or raise 401."""
    result = await verifier.verify(
        nonce=proof.nonce,
        domain=settings.sign_in_domain,
        message=proof.message,
        signature=proof.signature,
    )
    if not result.success:
        logger.warning(f"Unauthorized sign-in attempt: {result.error}")
        raise HTTPException(status_code=401, detail="Unauthorized")
    return result.fid


async def require_fid(
    proof: SignInProof = Depends(get_sign_in_proof),
    verifier: SignInVerifier = Depends(get_verifier),
    settings: Settings = Depends(get_settings),
) -> int:
    return await verify_proof(proof, verifier, settings)
