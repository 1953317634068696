from pathlib import Path

from core import FileRecord, FindReplaceParams, IterationParams, RenameSession


def records(*names: str):
    return [FileRecord.from_path(Path("/photos") / n) for n in names]


def test_add_files_dedupes_by_path() -> None:
    session = RenameSession()
    session.add_files(records("a.txt", "b.txt"))
    session.add_files(records("b.txt", "c.txt"))

    assert [f.name for f in session.files] == ["a.txt", "b.txt", "c.txt"]


def test_add_files_stops_at_cap() -> None:
    session = RenameSession(max_files=2)

    assert session.add_files(records("a", "b", "c")) is True
    assert [f.name for f in session.files] == ["a", "b"]
    assert session.add_files(records("a")) is False


def test_move_up_and_down_follow_selection() -> None:
    session = RenameSession()
    session.add_files(records("a", "b", "c"))

    session.select(2)
    assert session.move_up() is True
    assert [f.name for f in session.files] == ["a", "c", "b"]
    assert session.selected_index == 1

    assert session.move_down() is True
    assert [f.name for f in session.files] == ["a", "b", "c"]
    assert session.selected_index == 2


def test_move_at_edges_is_ignored() -> None:
    session = RenameSession()
    session.add_files(records("a", "b"))

    session.select(0)
    assert session.move_up() is False
    session.select(1)
    assert session.move_down() is False
    assert [f.name for f in session.files] == ["a", "b"]


def test_move_without_selection_is_ignored() -> None:
    session = RenameSession()
    session.add_files(records("a", "b"))
    assert session.move_up() is False
    assert session.move_down() is False


def test_select_out_of_range_is_ignored() -> None:
    session = RenameSession()
    session.add_files(records("a"))
    session.select(5)
    assert session.selected_index is None


def test_remove_selected_clamps_selection() -> None:
    session = RenameSession()
    session.add_files(records("a", "b", "c"))

    session.select(2)
    assert session.remove_selected().name == "c"
    assert session.selected_index == 1

    session.select(0)
    session.remove_selected()
    assert session.selected_index == 0
    assert [f.name for f in session.files] == ["b"]

    session.remove_selected()
    assert session.selected_index is None
    assert session.remove_selected() is None


def test_clear() -> None:
    session = RenameSession()
    session.add_files(records("a"))
    session.select(0)
    session.clear()
    assert len(session) == 0
    assert session.selected_index is None


def test_reordering_changes_numbering() -> None:
    session = RenameSession()
    session.add_files(records("a.jpg", "b.jpg"))
    params = IterationParams(template="img{n}", start_number=1, padding=0)

    assert [p.original_name for p in session.preview(params)] == ["a.jpg", "b.jpg"]

    session.select(1)
    session.move_up()

    result = session.preview(params)
    assert [(p.original_name, p.new_name) for p in result] == [("b.jpg", "img1.jpg"), ("a.jpg", "img2.jpg")]


def test_preview_without_files_is_empty() -> None:
    assert RenameSession().preview(FindReplaceParams(pattern="a")) == []
