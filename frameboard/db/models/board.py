from sqlalchemy import BigInteger, Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from frameboard.db.base import Base

class Board(Base):
    __tablename__ = "boards"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    fid = Column(BigInteger, nullable=False, index=True)
    slug = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    board_images = relationship(
        "BoardImage",
        back_populates="board",
        cascade="all, delete-orphan",
        order_by="BoardImage.id",
    )
