from frameboard.db.models.board import Board
from frameboard.db.models.board_image import BoardImage

__all__ = ["Board", "BoardImage"]
