import pytest

from fzcore.history import History, HistoryError

MAX_HISTORY = 50


def test_directory_is_invalid(tmp_path):
    with pytest.raises(HistoryError):
        History(str(tmp_path), MAX_HISTORY)


def test_missing_file_is_created(tmp_path):
    path = tmp_path / "history"
    history = History(str(path), MAX_HISTORY)
    assert path.exists()
    assert history.lines == [""]


def test_history(tmp_path):
    path = str(tmp_path / "history")
    open(path, "w").close()

    h = History(path, MAX_HISTORY)
    for _ in range(MAX_HISTORY + 10):
        h.append("foobar")

    h = History(path, MAX_HISTORY)
    assert len(h.lines) == MAX_HISTORY + 1
    assert h.lines[:MAX_HISTORY] == ["foobar"] * MAX_HISTORY

    h = History(path, MAX_HISTORY)
    h.append("barfoo")
    h.append("")
    h.append("foobarbaz")

    h = History(path, MAX_HISTORY)
    assert len(h.lines) == MAX_HISTORY + 1
    assert h.lines[MAX_HISTORY - 3] == "foobar"
    assert h.lines[MAX_HISTORY - 2] == "barfoo"
    assert h.lines[MAX_HISTORY - 1] == "foobarbaz"


def test_navigation_and_override(tmp_path):
    path = tmp_path / "history"
    path.write_text("a\nb\n")
    h = History(str(path), MAX_HISTORY)
    assert h.lines == ["a", "b", ""]
    assert h.current() == ""
    assert h.previous() == "b"
    assert h.previous() == "a"
    assert h.previous() == "a"

    h.override("changed")
    assert h.current() == "changed"
    assert h.lines[0] == "a"

    assert h.next() == "b"
    assert h.next() == ""
    assert h.next() == ""
    h.override("typing")
    assert h.lines[-1] == "typing"
    assert h.previous() == "b"
    assert h.previous() == "changed"