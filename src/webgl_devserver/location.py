"""Turn the server's self-location URL into a directory to read site files from.

The rule applied depends on the configured EnvironmentMode only. There is no
attempt to detect the real environment: a wrong mode produces a path that
does not exist, which `resolve_base_dir` reports before anything is served.
"""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

from webgl_devserver.config import EnvironmentMode, SiteConfig
from webgl_devserver.errors import PathResolutionError, StartupFileError

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]+:")

# Local paths keep their root; Windows paths start with a drive letter instead.
_PREFIX_RULES: dict[EnvironmentMode, tuple[re.Pattern[str], str]] = {
    EnvironmentMode.CONTAINERIZED: (re.compile(r"^file://"), ""),
    EnvironmentMode.LOCAL: (re.compile(r"^file:///"), "/"),
    EnvironmentMode.WINDOWS: (re.compile(r"^file:///"), ""),
}


@dataclass(frozen=True)
class SitePaths:
    base_dir: Path
    template: Path
    script: Path
    assets_dir: Path


def module_location() -> str:
    """Self-location of the server package, as a file: URL."""

    return Path(__file__).resolve().as_uri()


def strip_scheme_prefix(raw_location: str, mode: EnvironmentMode) -> str:
    """Strip the mode's file-scheme prefix and return the containing directory.

    >>> strip_scheme_prefix("file://foo/bar/serve.js", EnvironmentMode.CONTAINERIZED)
    'foo/bar'
    >>> strip_scheme_prefix("file:///foo/bar/serve.js", EnvironmentMode.LOCAL)
    '/foo/bar'

    A location without the expected prefix is left as is.
    """

    pattern, replacement = _PREFIX_RULES[mode]
    stripped = pattern.sub(replacement, raw_location, count=1)
    return posixpath.dirname(unquote(stripped))


def resolve_base_dir(raw_location: str, mode: EnvironmentMode) -> Path:
    resolved = strip_scheme_prefix(raw_location, mode)

    if _SCHEME_RE.match(resolved):
        raise PathResolutionError(
            f"Location {raw_location!r} still has a URL scheme after applying the "
            f"{mode.value!r} rule ({resolved!r}); is the environment mode correct?",
            path=resolved,
        )

    base_dir = Path(resolved)
    if not base_dir.is_dir():
        raise PathResolutionError(
            f"Base directory {resolved!r} resolved from {raw_location!r} in "
            f"{mode.value!r} mode does not exist; is the environment mode correct?",
            path=base_dir,
        )

    logger.info("Base directory: %s (mode: %s)", base_dir, mode.value)
    return base_dir


def resolve_site_paths(base_dir: Path, site: SiteConfig) -> SitePaths:
    assets_dir = base_dir / site.assets_dir
    if not assets_dir.is_dir():
        raise StartupFileError(f"Assets directory {assets_dir} does not exist", path=assets_dir)

    return SitePaths(
        base_dir=base_dir,
        template=base_dir / site.template,
        script=base_dir / site.script,
        assets_dir=assets_dir,
    )
