from __future__ import annotations

import logging
from pathlib import Path

import pytest

from webgl_devserver.assembler import SCRIPT_MARKER, assemble_document, inline_script
from webgl_devserver.errors import StartupFileError


def test_inline_script_replaces_marker() -> None:
    html = inline_script("<html><body>%SCRIPT%</body></html>", "console.log(1)")
    assert html == '<html><body><script type="module">console.log(1)</script></body></html>'
    assert SCRIPT_MARKER not in html


def test_inline_script_without_marker_is_identity() -> None:
    template = "<html><body>no marker</body></html>"
    assert inline_script(template, "console.log(1)") == template


def test_inline_script_replaces_first_marker_only() -> None:
    html = inline_script("%SCRIPT%|%SCRIPT%", "x()")
    assert html == '<script type="module">x()</script>|%SCRIPT%'


def test_inline_script_does_not_escape_script_body() -> None:
    body = 'if (a < b && c > d) { document.title = "<&>" }'
    assert body in inline_script("%SCRIPT%", body)


def test_assemble_document_reads_both_files(site_dir: Path) -> None:
    template = site_dir / "site" / "index.html"
    script = site_dir / "site" / "dist" / "init.js"

    document = assemble_document(template, script)

    assert document.html == (
        '<html><body><script type="module">console.log(1)</script></body></html>'
    )
    assert document.template_path == template
    assert document.script_path == script


def test_assemble_document_missing_template(site_dir: Path) -> None:
    missing = site_dir / "nope.html"
    with pytest.raises(StartupFileError) as excinfo:
        assemble_document(missing, site_dir / "site" / "dist" / "init.js")
    assert excinfo.value.path == missing
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_assemble_document_missing_script(site_dir: Path) -> None:
    with pytest.raises(StartupFileError):
        assemble_document(site_dir / "site" / "index.html", site_dir / "nope.js")


def test_assemble_document_invalid_utf8(site_dir: Path) -> None:
    script = site_dir / "site" / "dist" / "init.js"
    script.write_bytes(b"\xff\xfe\x00bad")

    with pytest.raises(StartupFileError) as excinfo:
        assemble_document(site_dir / "site" / "index.html", script)
    assert "UTF-8" in str(excinfo.value)


def test_assemble_document_warns_on_missing_marker(
    site_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    template = site_dir / "site" / "index.html"
    template.write_text("<html></html>", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="webgl_devserver.assembler"):
        document = assemble_document(template, site_dir / "site" / "dist" / "init.js")

    assert document.html == "<html></html>"
    assert "no %SCRIPT% marker" in caplog.text
