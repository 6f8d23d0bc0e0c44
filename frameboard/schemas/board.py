from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

class BoardImageRead(BaseModel):
    id: int
    board_id: int
    image_url: str
    caption: str = ""
    fid: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class BoardCreate(BaseModel):
    board_name: str = Field(..., alias="boardName", min_length=1)
    slug: str = Field(..., min_length=1)
    image_links: List[str] = Field(default_factory=list, alias="imageLinks")
    captions: Optional[List[str]] = None
    fid: Optional[int] = None  # ignored, the owner is the signed-in fid

    # sign-in proof travels in the same body
    nonce: Optional[str] = None
    message: Optional[str] = None
    signature: Optional[str] = None

class BoardRead(BaseModel):
    id: int
    name: str
    fid: int
    slug: str
    created_at: Optional[datetime] = None
    board_images: List[BoardImageRead]

    class Config:
        from_attributes = True

class StatusResponse(BaseModel):
    status: str
