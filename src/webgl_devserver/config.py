from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

ENV_PREFIX = "WEBGL_DEVSERVER_"
DEFAULT_PORT = 8080


class EnvironmentMode(StrEnum):
    """Where the server is deployed.

    Chosen at deployment time and never probed at runtime. It selects both the
    scheme-prefix rule used to turn the self-location URL into a directory and
    the default listen address.
    """

    LOCAL = "local"
    CONTAINERIZED = "containerized"
    WINDOWS = "windows"


class NetworkConfig(BaseModel):
    bind_host: str | None = Field(
        default=None,
        description="Overrides the per-mode host (127.0.0.1 locally, 0.0.0.0 in containers).",
    )
    port: int | None = Field(default=None, ge=1, le=65535)


class SiteConfig(BaseModel):
    """Files read at startup, relative to the resolved base directory."""

    location: str | None = Field(
        default=None,
        description=(
            "Raw self-location (a file: URL) whose directory is the base for site files. "
            "If omitted, the location of the server module is used."
        ),
    )
    template: str = Field(default="site/index.html")
    script: str = Field(default="site/dist/init.js")
    assets_dir: str = Field(default="site/dist")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    file: str | None = Field(default=None, description="Optional log file path.")
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class ServerConfig(BaseModel):
    mode: EnvironmentMode = Field(default=EnvironmentMode.LOCAL)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@dataclass(frozen=True)
class ListenAddress:
    host: str
    port: int

    @property
    def url(self) -> str:
        host = "localhost" if self.host in ("127.0.0.1", "localhost") else self.host
        return f"http://{host}:{self.port}"


_MODE_HOSTS: dict[EnvironmentMode, str] = {
    EnvironmentMode.LOCAL: "127.0.0.1",
    EnvironmentMode.WINDOWS: "127.0.0.1",
    EnvironmentMode.CONTAINERIZED: "0.0.0.0",
}


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_server_config(path: Path | None = None) -> ServerConfig:
    """Load config from a JSON file.

    - If no path is given or the file is missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    if path is None or not path.exists():
        return ServerConfig()

    raw = _read_json(path)
    return ServerConfig.model_validate(raw)


def config_path_from_env(environ: Mapping[str, str] | None = None) -> Path | None:
    env = os.environ if environ is None else environ
    raw = (env.get(f"{ENV_PREFIX}CONFIG") or "").strip()
    if not raw:
        return None
    return Path(raw).expanduser()


def apply_env_overrides(
    config: ServerConfig, environ: Mapping[str, str] | None = None
) -> ServerConfig:
    """Layer WEBGL_DEVSERVER_* environment variables over a loaded config.

    The merged result is re-validated, so a bad mode or port fails the same way a
    bad config file does.
    """

    env = os.environ if environ is None else environ
    data = config.model_dump(mode="json")

    mode = (env.get(f"{ENV_PREFIX}MODE") or "").strip()
    if mode:
        data["mode"] = mode

    host = (env.get(f"{ENV_PREFIX}BIND") or "").strip()
    if host:
        data["network"]["bind_host"] = host

    port = (env.get(f"{ENV_PREFIX}PORT") or "").strip()
    if port:
        data["network"]["port"] = port

    location = (env.get(f"{ENV_PREFIX}LOCATION") or "").strip()
    if location:
        data["site"]["location"] = location

    return ServerConfig.model_validate(data)


def resolve_listen_address(config: ServerConfig) -> ListenAddress:
    host = config.network.bind_host or _MODE_HOSTS[config.mode]
    port = config.network.port if config.network.port is not None else DEFAULT_PORT
    return ListenAddress(host=host, port=port)
