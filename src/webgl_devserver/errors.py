from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from webgl_devserver.config import ListenAddress


class DevServerError(Exception):
    """Base class for failures that must stop the server before it listens."""


class StartupFileError(DevServerError):
    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path


class PathResolutionError(StartupFileError):
    pass


class BindError(DevServerError):
    def __init__(self, message: str, *, address: ListenAddress) -> None:
        super().__init__(message)
        self.address = address
