from sqlalchemy import BigInteger, Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from frameboard.db.base import Base

class BoardImage(Base):
    __tablename__ = "board_images"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    board_id = Column(Integer, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False)
    image_url = Column(String, nullable=False)
    caption = Column(String, nullable=False, default="")
    fid = Column(BigInteger, nullable=False, index=True)  # duplicated from the board
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    board = relationship("Board", back_populates="board_images")
