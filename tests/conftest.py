import os
import tempfile

import pytest

# Set up test environment before any project module reads it
TEST_DB_PATH = tempfile.mkstemp(suffix='.db')[1]
os.environ['DB_PATH'] = TEST_DB_PATH
os.environ['EMBED_PROVIDER'] = 'hash'
os.environ['TEXT_PROVIDER'] = 'mock'
os.environ['DEBUG'] = 'true'

from src.core import config
from src.core.db import init_db


@pytest.fixture(autouse=True)
def isolated_db(tmp_path, monkeypatch):
    """Give every test its own empty database file."""
    db_path = str(tmp_path / "ideaboard.db")
    monkeypatch.setattr(config, "DB_PATH", db_path)
    init_db()
    return db_path


@pytest.fixture
def board_with_column():
    from src.core import dao

    board = dao.create_board("Test Board")
    column = dao.list_columns(board.id)[0]
    return board, column
