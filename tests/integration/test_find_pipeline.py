from __future__ import annotations

import io
import os
import shutil
import sys
from pathlib import Path

import pytest

from findfile.cli import create_cli

pytestmark = pytest.mark.skipif(
    not sys.platform.startswith("linux") or shutil.which("find") is None,
    reason="needs GNU find, du and sort",
)


def _touch(path: Path, content: str, mtime: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    os.utime(path, (mtime, mtime))


def _run(tokens: list[str], home: Path) -> tuple[int, str, str]:
    cli = create_cli(environ={}, home_dir=str(home), current_dir=str(home))
    out = io.StringIO()
    err = io.StringIO()
    code = cli.run(tokens, out_stream=out, err_stream=err)
    return code, out.getvalue(), err.getvalue()


def test_real_search_excludes_sorts_and_selects(tmp_path: Path) -> None:
    root = tmp_path / "tree"
    _touch(root / "a" / "src" / "foo.txt", "foo", 1_600_000_000)
    _touch(root / "a" / "src" / "skipme" / "bar.txt", "bar", 1_600_000_100)
    _touch(root / "a" / "src" / "baz.txt", "bazbaz", 1_600_000_200)
    _touch(root / "a" / "src" / ".hidden.txt", "hidden-content", 1_600_000_300)

    code, listing, errors = _run([str(root), "src", "txt", "-skipme"], tmp_path)

    assert code == 0, errors
    lines = listing.splitlines()
    assert len(lines) == 2
    assert "foo" in lines[0]
    assert "baz" in lines[1]

    code, selected, _ = _run([str(root), "src", "txt", "-skipme", "-q", "-2"], tmp_path)
    assert selected == f'"{root}/a/src/baz.txt"\n'

    code, by_size, _ = _run([str(root), "txt", "-a", "-S", "-q"], tmp_path)
    assert by_size.splitlines()[0] == f'"{root}/a/src/.hidden.txt"'


def test_real_directory_search_does_not_descend_into_matches(tmp_path: Path) -> None:
    root = tmp_path / "tree"
    _touch(root / "logs" / "logs-old" / "x.txt", "x", 1_600_000_000)
    _touch(root / "other" / "y.txt", "y", 1_600_000_000)

    code, output, _ = _run([str(root), "logs", "-d", "-q"], tmp_path)

    assert code == 0
    assert output == f'"{root}/logs"\n'
