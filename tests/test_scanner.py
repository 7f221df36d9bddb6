# tests/test_scanner.py
import logging
from pathlib import Path

import pytest

from ctxgate.core.scanner import FileCollector, is_binary, parse_extensions


# --- Helpers ---

def test_parse_extensions_normalizes():
    assert parse_extensions("go, .PY,,  ") == {".go", ".py"}
    assert parse_extensions("") == set()


def test_is_binary():
    assert is_binary(b"hello\nworld\t!\r\n") is False
    assert is_binary(b"abc\x00def") is True
    assert is_binary(b"\x01\x02\x03\x04abc") is True
    assert is_binary(b"") is False


# --- Filtering ---

def test_include_only_counts_matching_files(project):
    collector = FileCollector(include=".go", exclude_names="vendor")
    records, count = collector.collect([str(project)])

    assert count == 2
    assert [r.path for r in records] == [
        str(project / "src" / "main.go"),
        str(project / "src" / "util.go"),
    ]


def test_hidden_files_and_dirs_are_skipped(project):
    records, _ = FileCollector().collect([str(project)])
    paths = [r.path for r in records]

    assert str(project / ".env") not in paths
    assert str(project / ".git" / "config") not in paths
    assert str(project / "src" / ".hidden.go") not in paths
    assert str(project / "docs" / "guide.md") in paths


def test_hidden_file_kept_when_named_in_include(project):
    records, count = FileCollector(include=".env").collect([str(project)])

    assert count == 1
    assert records[0].path == str(project / ".env")
    assert records[0].content == "SECRET=1\n"


def test_exclude_applies_after_include(project):
    collector = FileCollector(include="go,md", exclude=".md", exclude_names="vendor")
    records, _ = collector.collect([str(project)])

    assert all(r.path.endswith(".go") for r in records)
    assert len(records) == 2


def test_exclude_names_prunes_subtree(project):
    records, _ = FileCollector(exclude_names="vendor, docs").collect([str(project)])
    paths = [r.path for r in records]

    assert not any("vendor" in p for p in paths)
    assert not any("guide.md" in p for p in paths)
    assert str(project / "src" / "main.go") in paths


def test_extension_match_is_case_insensitive(tmp_path):
    (tmp_path / "Upper.GO").write_text("x", encoding="utf-8")
    records, count = FileCollector(include="go").collect([str(tmp_path)])

    assert count == 1
    assert records[0].path.endswith("Upper.GO")


def test_gitignore_rules_are_honored(project):
    (project / ".gitignore").write_text("docs/\n*.md\n", encoding="utf-8")
    records, _ = FileCollector(exclude_names="vendor").collect([str(project)])

    assert [r.path for r in records] == [
        str(project / "src" / "main.go"),
        str(project / "src" / "util.go"),
    ]


# --- Repository ignore files ---

@pytest.fixture
def repo(tmp_path):
    """A git work tree whose top-level .gitignore hides build output and logs."""
    (tmp_path / ".git").mkdir()
    (tmp_path / ".gitignore").write_text("generated/\n*.log.txt\n", encoding="utf-8")
    src = tmp_path / "src"
    (src / "generated").mkdir(parents=True)
    (src / "main.py").write_text("print(1)\n", encoding="utf-8")
    (src / "debug.log.txt").write_text("log\n", encoding="utf-8")
    (src / "generated" / "big.py").write_text("x = 1\n", encoding="utf-8")
    return tmp_path


def test_top_level_gitignore_applies_to_subfolder_scan(repo):
    records, count = FileCollector().collect([str(repo / "src")])

    assert count == 1
    assert records[0].path == str(repo / "src" / "main.py")


def test_nested_gitignore_applies_to_its_own_subtree(repo):
    pkg = repo / "src" / "pkg"
    pkg.mkdir()
    (pkg / ".gitignore").write_text("*.tmp.txt\n!keep.log.txt\n", encoding="utf-8")
    (pkg / "scratch.tmp.txt").write_text("s\n", encoding="utf-8")
    (pkg / "keep.log.txt").write_text("k\n", encoding="utf-8")
    (repo / "src" / "notes.tmp.txt").write_text("n\n", encoding="utf-8")

    records, _ = FileCollector().collect([str(repo / "src")])
    paths = [r.path for r in records]

    assert str(pkg / "scratch.tmp.txt") not in paths
    assert str(pkg / "keep.log.txt") in paths
    assert str(repo / "src" / "notes.tmp.txt") in paths
    assert str(repo / "src" / "debug.log.txt") not in paths


def test_explicit_ignored_file_is_skipped(repo):
    records, count = FileCollector().collect([str(repo / "src" / "debug.log.txt")])
    assert (records, count) == ([], 0)


# --- Paths and failures ---

def test_nonexistent_root_yields_nothing(caplog):
    with caplog.at_level(logging.WARNING):
        records, count = FileCollector().collect(["/nonexistent"])
    assert records == []
    assert count == 0
    assert "Cannot stat path /nonexistent" in caplog.text


def test_missing_root_does_not_stop_other_paths(project):
    records, count = FileCollector(include="go").collect(
        [str(project / "missing"), str(project / "src")]
    )
    assert count == 2


def test_explicit_file_path(project):
    target = project / "src" / "main.go"
    records, count = FileCollector().collect([str(target)])

    assert count == 1
    assert records[0].content == target.read_text(encoding="utf-8")


def test_binary_and_non_utf8_files_are_skipped(tmp_path):
    (tmp_path / "data.txt").write_bytes(b"abc\x00def")
    (tmp_path / "latin.txt").write_bytes("caf\xe9".encode("latin-1"))
    (tmp_path / "ok.txt").write_text("fine", encoding="utf-8")

    records, count = FileCollector().collect([str(tmp_path)])
    assert count == 1
    assert records[0].path.endswith("ok.txt")


def test_unreadable_file_is_logged_and_skipped(project, monkeypatch, caplog):
    original = Path.read_bytes

    def flaky_read(self):
        if self.name == "util.go":
            raise PermissionError("permission denied")
        return original(self)

    monkeypatch.setattr(Path, "read_bytes", flaky_read)

    with caplog.at_level(logging.WARNING):
        records, count = FileCollector(include="go", exclude_names="vendor").collect([str(project)])

    assert count == 1
    assert records[0].path.endswith("main.go")
    assert "Cannot read file" in caplog.text


def test_verbose_logs_skip_decisions(project, caplog):
    caplog.set_level(logging.DEBUG)
    FileCollector(include="go", verbose=True).collect([str(project / "src")])

    assert "Skipping hidden file" in caplog.text
    assert "Skipping non-included extension" in caplog.text


# --- Ordering ---

def test_traversal_is_deterministic(project):
    collector = FileCollector(exclude_names="vendor")
    first, _ = collector.collect([str(project)])
    second, _ = collector.collect([str(project)])

    assert first == second
    paths = [r.path for r in first]
    assert paths.index(str(project / "docs" / "guide.md")) < paths.index(str(project / "src" / "main.go"))


def test_on_file_callback_sees_paths_in_order(project):
    seen = []
    records, _ = FileCollector(exclude_names="vendor", on_file=seen.append).collect([str(project)])
    assert seen == [r.path for r in records]
