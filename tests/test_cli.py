from pathlib import Path

import pytest

from cli import main
from core import exec_rename, temp_prefix


def touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_text(name)


def test_scan_lists_files(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    touch(tmp_path, "b10.txt", "b2.txt")

    assert main(["scan", str(tmp_path)]) == 0

    out = capsys.readouterr().out
    assert out.index("b2.txt") < out.index("b10.txt")


def test_scan_missing_directory_fails(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert main(["scan", str(tmp_path / "missing")]) == 1
    assert "does not exist" in capsys.readouterr().out


def test_replace_dry_run_changes_nothing(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    touch(tmp_path, "img_01.png")

    assert main(["replace", str(tmp_path), "--find", "IMG", "--replace", "pic", "--dry-run"]) == 0

    assert "pic_01.png" in capsys.readouterr().out
    assert (tmp_path / "img_01.png").exists()


def test_replace_executes_with_yes(tmp_path: Path) -> None:
    touch(tmp_path, "img_01.png", "img_02.png", "other.txt")

    assert main(["replace", str(tmp_path), "--find", "img", "--replace", "pic", "--yes"]) == 0

    assert sorted(p.name for p in tmp_path.iterdir()) == ["other.txt", "pic_01.png", "pic_02.png"]


def test_replace_refuses_conflicts(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    touch(tmp_path, "a1.txt", "a2.txt")

    assert main(["replace", str(tmp_path), "--regex", "--find", r"\d", "--yes"]) == 1

    assert "[CONFLICT]" in capsys.readouterr().out
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a1.txt", "a2.txt"]


def test_replace_invalid_regex_reports_error(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    touch(tmp_path, "a.txt")

    assert main(["replace", str(tmp_path), "--regex", "--find", "(", "--yes"]) == 1
    assert "Invalid regex" in capsys.readouterr().out


def test_sequence_uses_natural_order(tmp_path: Path) -> None:
    touch(tmp_path, "f10.jpg", "f2.jpg")

    assert main(["sequence", str(tmp_path), "--template", "photo_{n}", "--padding", "2", "--yes"]) == 0

    assert (tmp_path / "photo_01.jpg").read_text() == "f2.jpg"
    assert (tmp_path / "photo_02.jpg").read_text() == "f10.jpg"


def test_sequence_missing_placeholder(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    touch(tmp_path, "a.jpg")

    assert main(["sequence", str(tmp_path), "--template", "photo", "--yes"]) == 1
    assert "placeholder" in capsys.readouterr().out


def test_recover(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    touch(tmp_path, f"{temp_prefix()}done.txt")

    assert main(["recover", str(tmp_path)]) == 0

    assert (tmp_path / "done.txt").exists()
    assert "Recovered 1 file(s)" in capsys.readouterr().out


def test_no_command_prints_help(capsys: pytest.CaptureFixture) -> None:
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_recover_force_includes_running_processes(
    tmp_path: Path, capsys: pytest.CaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(exec_rename, "_pid_alive", lambda pid: True)
    touch(tmp_path, ".rename_temp_4242_busy.txt")

    assert main(["recover", str(tmp_path)]) == 0
    assert "Recovered 0 file(s)" in capsys.readouterr().out

    assert main(["recover", "--force", str(tmp_path)]) == 0
    assert (tmp_path / "busy.txt").exists()
    assert "Recovered 1 file(s)" in capsys.readouterr().out


def test_sequence_template_too_long(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    touch(tmp_path, "a.jpg")

    assert main(["sequence", str(tmp_path), "--template", "{n}" + "x" * 300, "--yes"]) == 1
    assert "Template too long" in capsys.readouterr().out
    assert (tmp_path / "a.jpg").exists()
