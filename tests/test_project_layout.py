from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/findfile/cli.py",
        "src/findfile/config.py",
        "src/findfile/query/__init__.py",
        "src/findfile/results/__init__.py",
        "src/findfile/external/__init__.py",
        "src/findfile/logging/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
