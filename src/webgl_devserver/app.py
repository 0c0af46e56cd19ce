from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from starlette.staticfiles import StaticFiles

from webgl_devserver.assembler import AssembledDocument, assemble_document
from webgl_devserver.config import ServerConfig
from webgl_devserver.location import module_location, resolve_base_dir, resolve_site_paths

logger = logging.getLogger(__name__)


def create_app(document: AssembledDocument, assets_dir: Path) -> FastAPI:
    app = FastAPI(
        title="WebGL Dev Server",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.document = document
    app.state.assets_dir = assets_dir

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        return HTMLResponse(request.app.state.document.html)

    # Mounted last so `/` above wins; everything else is a file lookup or a 404.
    app.mount("/", StaticFiles(directory=str(assets_dir)), name="assets")

    return app


def build_app(config: ServerConfig) -> FastAPI:
    """Run the startup phase and return an app ready to serve.

    Raises StartupFileError before any socket is opened if the base directory,
    the assets directory, the template or the script cannot be used.
    """

    location = config.site.location or module_location()
    base_dir = resolve_base_dir(location, config.mode)
    paths = resolve_site_paths(base_dir, config.site)
    document = assemble_document(paths.template, paths.script)
    return create_app(document, paths.assets_dir)
