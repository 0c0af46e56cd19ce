from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """A project directory laid out like the bundled demo site."""

    dist = tmp_path / "site" / "dist"
    dist.mkdir(parents=True)
    (tmp_path / "site" / "index.html").write_text(
        "<html><body>%SCRIPT%</body></html>", encoding="utf-8"
    )
    (dist / "init.js").write_text("console.log(1)", encoding="utf-8")
    (dist / "style.css").write_text("body { margin: 0; }", encoding="utf-8")
    return tmp_path


@pytest.fixture
def site_location(site_dir: Path) -> str:
    return (site_dir / "serve.py").as_uri()
