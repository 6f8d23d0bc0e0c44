import pytest
from sqlalchemy.exc import IntegrityError

from frameboard.db import crud
from frameboard.db.models import BoardImage


def test_build_images_pairs_captions_positionally():
    images = crud.build_images(["u1", "u2", "u3"], ["c1", "c2"], fid=5)

    assert [i.image_url for i in images] == ["u1", "u2", "u3"]
    assert [i.caption for i in images] == ["c1", "c2", ""]
    assert {i.fid for i in images} == {5}


def test_build_images_ignores_extra_captions():
    images = crud.build_images(["u1"], ["c1", "c2"], fid=5)
    assert [i.caption for i in images] == ["c1"]


async def test_create_and_fetch(db):
    board = await crud.create_board(db, "Board", 9, "slug-1", ["u1", "u2"], ["hello"])
    assert board.id is not None

    fetched = await crud.get_board_by_slug(db, "slug-1")
    assert fetched.id == board.id
    assert [(i.image_url, i.caption) for i in fetched.board_images] == [
        ("u1", "hello"),
        ("u2", ""),
    ]


async def test_list_boards_descending(db):
    first = await crud.create_board(db, "One", 9, "one", [])
    second = await crud.create_board(db, "Two", 9, "two", [])
    await crud.create_board(db, "Else", 10, "else", [])

    boards = await crud.list_boards(db, 9)
    assert [b.id for b in boards] == [second.id, first.id]


async def test_duplicate_slug_rolls_back_whole_board(db, count_rows):
    await crud.create_board(db, "One", 9, "same", ["u1"])

    with pytest.raises(IntegrityError):
        await crud.create_board(db, "Two", 9, "same", ["u2", "u3"])

    assert await count_rows(BoardImage) == 1
    # the session is usable again after the rollback
    assert await crud.get_board_by_slug(db, "same") is not None


async def test_get_missing_board(db):
    assert await crud.get_board_by_slug(db, "ghost") is None
