from typing import Optional
from pydantic import BaseModel

class SignInProof(BaseModel):
    nonce: str
    message: str
    signature: str

class VerifyResponse(BaseModel):
    status: str
    fid: int

class PresignedUrl(BaseModel):
    url: str
    gateway: Optional[str] = None  # host that serves the uploaded files
