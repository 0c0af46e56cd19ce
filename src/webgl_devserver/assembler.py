from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from webgl_devserver.errors import StartupFileError

logger = logging.getLogger(__name__)

SCRIPT_MARKER = "%SCRIPT%"


@dataclass(frozen=True)
class AssembledDocument:
    """The page served at `/`, built once before the server starts listening."""

    html: str
    template_path: Path
    script_path: Path


def script_element(body: str) -> str:
    # The bundle is trusted build output and is inlined verbatim.
    return f'<script type="module">{body}</script>'


def inline_script(template: str, script: str) -> str:
    """Replace the first script marker in `template` with an inline module script.

    A template without the marker is returned unchanged.
    """

    return template.replace(SCRIPT_MARKER, script_element(script), 1)


def _read_text(path: Path, *, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise StartupFileError(f"{what} file not found: {path}", path=path) from exc
    except UnicodeDecodeError as exc:
        raise StartupFileError(f"{what} file is not valid UTF-8: {path} ({exc})", path=path) from exc
    except OSError as exc:
        raise StartupFileError(f"Cannot read {what.lower()} file {path}: {exc}", path=path) from exc


def assemble_document(template_path: Path, script_path: Path) -> AssembledDocument:
    template = _read_text(template_path, what="Template")
    script = _read_text(script_path, what="Script")

    markers = template.count(SCRIPT_MARKER)
    if markers == 0:
        logger.warning(
            "Template %s has no %s marker; the script will not be inlined",
            template_path,
            SCRIPT_MARKER,
        )
    elif markers > 1:
        logger.warning(
            "Template %s has %d %s markers; only the first is replaced",
            template_path,
            markers,
            SCRIPT_MARKER,
        )

    html = inline_script(template, script)
    logger.info("Assembled %s with %s (%d bytes)", template_path, script_path, len(html))
    return AssembledDocument(html=html, template_path=template_path, script_path=script_path)
