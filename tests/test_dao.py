from src.core import dao
from src.core.db import health_check
from src.vector.embeddings import embed


def test_database_health():
    assert health_check() is True


def test_board_lifecycle():
    board = dao.create_board("  Product ideas  ")
    assert board is not None
    assert board.name == "Product ideas"
    assert dao.get_board(board.id) == board
    assert board.id in [b.id for b in dao.list_boards()]

    assert dao.delete_board(board.id) is True
    assert dao.get_board(board.id) is None
    assert dao.delete_board(board.id) is False


def test_get_board_with_blank_id():
    assert dao.get_board("") is None
    assert dao.get_board("   ") is None


def test_new_board_has_default_columns():
    board = dao.create_board("Roadmap")
    columns = dao.list_columns(board.id)

    assert [c.title for c in columns] == list(dao.DEFAULT_COLUMNS)
    assert [c.title for c in columns] == ["Ideas", "In Progress", "Completed"]
    assert [c.position for c in columns] == [0, 1, 2]


def test_update_board_renames(board_with_column):
    board, _ = board_with_column

    updated = dao.update_board(board.id, "  Renamed  ")
    assert updated.name == "Renamed"
    assert updated.created_at == board.created_at
    assert updated.updated_at >= board.updated_at
    assert dao.get_board(board.id).name == "Renamed"


def test_update_missing_board_returns_none():
    assert dao.update_board("missing", "Name") is None


def test_columns_are_appended_in_order(board_with_column):
    board, first = board_with_column
    added = dao.create_column(board.id, "Doing")

    assert first.position == 0
    assert added.position == len(dao.DEFAULT_COLUMNS)
    assert dao.list_columns(board.id)[-1].id == added.id


def test_create_card_stores_text_and_embedding(board_with_column):
    board, column = board_with_column
    vector = embed("Solar panels ")
    card = dao.create_card(board.id, column.id, "Solar panels", embedding=vector, mood="excited")

    stored = dao.get_card(card.id)
    assert stored.title == "Solar panels"
    assert stored.description == ""
    assert stored.embedding == vector
    assert stored.mood == "excited"
    assert stored.revision == 0
    assert stored.cluster_id is None
    assert stored.text == "Solar panels "


def test_cards_listed_in_creation_order(board_with_column):
    board, column = board_with_column
    ids = [dao.create_card(board.id, column.id, f"Card {i}").id for i in range(4)]

    assert [c.id for c in dao.list_cards(board.id)] == ids
    assert [c.position for c in dao.list_cards(board.id)] == [0, 1, 2, 3]
    assert [c.id for c in dao.list_cards(board.id, limit=2)] == ids[:2]
    assert dao.get_card_count(board.id) == 4
    assert dao.get_card_count() == 4


def test_update_card_content_bumps_revision(board_with_column):
    board, column = board_with_column
    card = dao.create_card(board.id, column.id, "Old title", embedding=embed("Old title "))

    new_vector = embed("New title details")
    updated = dao.update_card_content(card.id, "New title", "details", new_vector, "positive")

    assert updated.title == "New title"
    assert updated.description == "details"
    assert updated.embedding == new_vector
    assert updated.mood == "positive"
    assert updated.revision == card.revision + 1


def test_update_missing_card_returns_none():
    assert dao.update_card_content("missing", "t", "d", [0.0], "neutral") is None


def test_set_card_embedding_rejects_stale_revision(board_with_column):
    board, column = board_with_column
    card = dao.create_card(board.id, column.id, "Draft")
    dao.update_card_content(card.id, "Final", "", embed("Final "), "neutral")

    assert dao.set_card_embedding(card.id, embed("Draft "), expected_revision=card.revision) is False
    assert dao.get_card(card.id).embedding == embed("Final ")

    current = dao.get_card(card.id)
    assert dao.set_card_embedding(card.id, embed("Final "), expected_revision=current.revision) is True


def test_move_card_within_column(board_with_column):
    board, column = board_with_column
    a, b, c = [dao.create_card(board.id, column.id, title) for title in ("A", "B", "C")]

    moved = dao.move_card(c.id, column.id, 0)
    assert moved.position == 0
    assert [card.title for card in sorted(dao.list_cards(board.id), key=lambda x: x.position)] == ["C", "A", "B"]


def test_move_card_between_columns(board_with_column):
    board, todo = board_with_column
    done = dao.create_column(board.id, "Done")
    a, b = dao.create_card(board.id, todo.id, "A"), dao.create_card(board.id, todo.id, "B")
    x = dao.create_card(board.id, done.id, "X")

    moved = dao.move_card(a.id, done.id, 99)
    assert moved.column_id == done.id
    assert moved.position == 1
    assert dao.get_card(b.id).position == 0
    assert dao.get_card(x.id).position == 0


def test_move_card_rejects_column_on_other_board(board_with_column):
    board, column = board_with_column
    other_board = dao.create_board("Other")
    other_column = dao.create_column(other_board.id, "Elsewhere")
    card = dao.create_card(board.id, column.id, "Stay")

    assert dao.move_card(card.id, other_column.id, 0) is None
    assert dao.get_card(card.id).column_id == column.id


def test_delete_card_compacts_positions(board_with_column):
    board, column = board_with_column
    a, b, c = [dao.create_card(board.id, column.id, title) for title in ("A", "B", "C")]

    assert dao.delete_card(a.id) is True
    assert dao.get_card(a.id) is None
    assert dao.get_card(b.id).position == 0
    assert dao.get_card(c.id).position == 1
    assert dao.delete_card(a.id) is False


def test_assign_clusters_replaces_previous_assignments(board_with_column):
    board, column = board_with_column
    a, b = dao.create_card(board.id, column.id, "A"), dao.create_card(board.id, column.id, "B")

    assert dao.assign_clusters(board.id, {a.id: "cluster-0", b.id: "cluster-0"})
    assert dao.assign_clusters(board.id, {a.id: "cluster-1"})

    assert dao.get_card(a.id).cluster_id == "cluster-1"
    assert dao.get_card(b.id).cluster_id is None


def test_deleting_board_cascades_to_cards(board_with_column):
    board, column = board_with_column
    card = dao.create_card(board.id, column.id, "Orphan?")

    dao.delete_board(board.id)
    assert dao.get_card(card.id) is None
    assert dao.list_columns(board.id) == []
