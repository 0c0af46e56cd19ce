from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import uvicorn
from pydantic import ValidationError

from webgl_devserver.app import build_app
from webgl_devserver.config import (
    LoggingConfig,
    apply_env_overrides,
    config_path_from_env,
    load_server_config,
    resolve_listen_address,
)
from webgl_devserver.errors import BindError, StartupFileError
from webgl_devserver.listener import bind_listener

logger = logging.getLogger("webgl_devserver")


def configure_logging(config: LoggingConfig) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_path,
                maxBytes=config.max_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=config.level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def main() -> None:
    try:
        config = apply_env_overrides(load_server_config(config_path_from_env()))
    except (OSError, ValueError) as exc:
        # ValidationError is a ValueError; so is a malformed JSON file.
        logging.basicConfig(level=logging.INFO)
        kind = "Invalid" if isinstance(exc, ValidationError) else "Cannot load"
        logger.error("%s configuration: %s", kind, exc)
        sys.exit(1)

    configure_logging(config.logging)

    try:
        app = build_app(config)
    except StartupFileError as exc:
        logger.error("Startup failed: %s", exc)
        sys.exit(1)

    address = resolve_listen_address(config)
    try:
        sock = bind_listener(address)
    except BindError as exc:
        logger.error("Startup failed: %s", exc)
        sys.exit(1)

    logger.info(f"Started: {address.url}")

    server = uvicorn.Server(uvicorn.Config(app, log_config=None))
    server.run(sockets=[sock])


if __name__ == "__main__":
    main()
