import os
import sys
from pathlib import Path

import pytest

from core import exec_rename
from core import (
    DuplicateTargetError, FileRecord, InvalidNameError, RenameFailedError,
    RenamePreview, TargetExistsError, execute_renames, find_temp_files,
    recover_temp_files, temp_prefix,
)


def make_file(directory: Path, name: str) -> FileRecord:
    path = directory / name
    path.write_text(f"content of {name}")
    return FileRecord.from_path(path)


def rename(record: FileRecord, new_name: str) -> RenamePreview:
    return RenamePreview.for_record(record, new_name)


def names(directory: Path):
    return sorted(p.name for p in directory.iterdir())


def test_empty_batch_is_noop() -> None:
    assert execute_renames([]) == 0


def test_simple_rename(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a.txt")

    assert execute_renames([rename(a, "b.txt")]) == 1

    assert names(tmp_path) == ["b.txt"]
    assert (tmp_path / "b.txt").read_text() == "content of a.txt"


def test_swap_succeeds(tmp_path: Path) -> None:
    a = make_file(tmp_path, "A")
    b = make_file(tmp_path, "B")

    assert execute_renames([rename(a, "B"), rename(b, "A")]) == 2

    assert (tmp_path / "A").read_text() == "content of B"
    assert (tmp_path / "B").read_text() == "content of A"
    assert names(tmp_path) == ["A", "B"]


def test_chain_rename(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a")
    b = make_file(tmp_path, "b")

    assert execute_renames([rename(a, "b"), rename(b, "c")]) == 2

    assert (tmp_path / "b").read_text() == "content of a"
    assert (tmp_path / "c").read_text() == "content of b"


def test_existing_target_blocks_commit(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a.txt")
    b = make_file(tmp_path, "b.txt")
    make_file(tmp_path, "taken.txt")

    with pytest.raises(TargetExistsError, match="taken.txt"):
        execute_renames([rename(a, "free.txt"), rename(b, "taken.txt")])

    assert names(tmp_path) == ["a.txt", "b.txt", "taken.txt"]


def test_existing_directory_target_blocks_commit(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a.txt")
    (tmp_path / "folder").mkdir()

    with pytest.raises(TargetExistsError):
        execute_renames([rename(a, "folder")])


def test_hard_link_target_blocks_commit(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a.txt")
    os.link(tmp_path / "a.txt", tmp_path / "h.txt")

    with pytest.raises(TargetExistsError, match="h.txt"):
        execute_renames([rename(a, "h.txt")])

    assert names(tmp_path) == ["a.txt", "h.txt"]


@pytest.mark.skipif(sys.platform != "linux", reason="needs a case-sensitive filesystem")
def test_case_variant_hard_link_blocks_commit(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a.txt")
    os.link(tmp_path / "a.txt", tmp_path / "A.txt")

    with pytest.raises(TargetExistsError, match="A.txt"):
        execute_renames([rename(a, "A.txt")])

    assert names(tmp_path) == ["A.txt", "a.txt"]


def test_case_only_rename_on_case_insensitive_filesystem(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    a = make_file(tmp_path, "a.txt")
    real_lstat = os.lstat

    # Resolve "A.txt" to the existing "a.txt" entry, as a case-insensitive
    # filesystem does
    def fake_lstat(path, *args, **kwargs):
        if Path(path) == tmp_path / "A.txt" and (tmp_path / "a.txt").exists():
            path = tmp_path / "a.txt"
        return real_lstat(path, *args, **kwargs)

    monkeypatch.setattr(os, "lstat", fake_lstat)
    assert os.path.lexists(tmp_path / "A.txt")

    assert execute_renames([rename(a, "A.txt")]) == 1

    monkeypatch.undo()
    assert names(tmp_path) == ["A.txt"]


def test_duplicate_target_blocks_commit(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a.txt")
    b = make_file(tmp_path, "b.txt")

    with pytest.raises(DuplicateTargetError):
        execute_renames([rename(a, "x.txt"), rename(b, "x.txt")])

    assert names(tmp_path) == ["a.txt", "b.txt"]


def test_invalid_name_blocks_commit(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a.txt")
    b = make_file(tmp_path, "b.txt")

    with pytest.raises(InvalidNameError):
        execute_renames([rename(a, "ok.txt"), rename(b, "sub/b.txt")])

    assert names(tmp_path) == ["a.txt", "b.txt"]


def test_noops_are_not_touched(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    keep = make_file(tmp_path, "keep.txt")
    move = make_file(tmp_path, "move.txt")
    calls = []
    real_rename = os.rename

    def tracking_rename(src, dst):
        calls.append(Path(src).name)
        real_rename(src, dst)

    monkeypatch.setattr(os, "rename", tracking_rename)

    assert execute_renames([rename(keep, "keep.txt"), rename(move, "moved.txt")]) == 1

    assert "keep.txt" not in calls
    assert names(tmp_path) == ["keep.txt", "moved.txt"]


def test_progress_callback_reports_both_phases(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a")
    b = make_file(tmp_path, "b")
    events = []

    execute_renames(
        [rename(a, "c"), rename(b, "d")],
        progress_callback=lambda cur, total, msg: events.append((cur, total, msg)),
    )

    assert [(cur, total) for cur, total, _ in events] == [(1, 4), (2, 4), (3, 4), (4, 4)]
    assert events[0][2].startswith("[Phase 1]")
    assert events[-1][2].startswith("[Phase 2]")


def test_phase_one_failure_leaves_temp_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    a = make_file(tmp_path, "a")
    b = make_file(tmp_path, "b")
    real_rename = os.rename
    calls = []

    def flaky_rename(src, dst):
        calls.append(src)
        if len(calls) == 2:
            raise PermissionError(13, "Permission denied")
        real_rename(src, dst)

    monkeypatch.setattr(os, "rename", flaky_rename)

    with pytest.raises(RenameFailedError) as excinfo:
        execute_renames([rename(a, "x"), rename(b, "y")])

    err = excinfo.value
    assert err.phase == 1
    assert err.source == b.path
    assert err.renamed == 0
    assert err.stranded == [tmp_path / f"{temp_prefix()}x"]
    assert names(tmp_path) == sorted(["b", f"{temp_prefix()}x"])


def test_phase_two_failure_keeps_finalized(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    a = make_file(tmp_path, "a")
    b = make_file(tmp_path, "b")
    real_rename = os.rename
    calls = []

    def flaky_rename(src, dst):
        calls.append(src)
        if len(calls) == 4:
            raise OSError(5, "Input/output error")
        real_rename(src, dst)

    monkeypatch.setattr(os, "rename", flaky_rename)

    with pytest.raises(RenameFailedError) as excinfo:
        execute_renames([rename(a, "x"), rename(b, "y")])

    err = excinfo.value
    assert err.phase == 2
    assert err.renamed == 1
    assert err.target == tmp_path / "y"
    assert err.stranded == [tmp_path / f"{temp_prefix()}y"]
    assert names(tmp_path) == sorted(["x", f"{temp_prefix()}y"])


def test_stale_temp_file_blocks_commit(tmp_path: Path) -> None:
    a = make_file(tmp_path, "a")
    make_file(tmp_path, f"{temp_prefix()}b")

    with pytest.raises(TargetExistsError):
        execute_renames([rename(a, "b")])

    assert (tmp_path / "a").exists()


def test_temp_prefix_is_process_unique() -> None:
    assert str(os.getpid()) in temp_prefix()
    assert temp_prefix().startswith(".")


def test_recover_finishes_stranded_renames(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(exec_rename, "_pid_alive", lambda pid: False)
    make_file(tmp_path, f"{temp_prefix()}final.txt")
    make_file(tmp_path, ".rename_temp_4242_other.txt")
    make_file(tmp_path, "unrelated.txt")

    assert set(find_temp_files(tmp_path).values()) == {"final.txt", "other.txt"}
    assert recover_temp_files(tmp_path) == 2

    assert names(tmp_path) == ["final.txt", "other.txt", "unrelated.txt"]


def test_recover_skips_taken_names(tmp_path: Path) -> None:
    make_file(tmp_path, f"{temp_prefix()}final.txt")
    make_file(tmp_path, "final.txt")

    assert recover_temp_files(tmp_path) == 0
    assert (tmp_path / f"{temp_prefix()}final.txt").exists()


def test_recover_skips_running_processes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(exec_rename, "_pid_alive", lambda pid: pid == 4242)
    make_file(tmp_path, ".rename_temp_4242_busy.txt")
    make_file(tmp_path, ".rename_temp_4343_dead.txt")

    assert recover_temp_files(tmp_path) == 1
    assert names(tmp_path) == [".rename_temp_4242_busy.txt", "dead.txt"]

    assert recover_temp_files(tmp_path, include_live=True) == 1
    assert names(tmp_path) == ["busy.txt", "dead.txt"]


def test_own_process_is_not_running_elsewhere() -> None:
    assert not exec_rename._pid_alive(os.getpid())
    assert not exec_rename._pid_alive(0)
