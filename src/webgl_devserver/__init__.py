from webgl_devserver.assembler import SCRIPT_MARKER, AssembledDocument, assemble_document
from webgl_devserver.config import EnvironmentMode, ListenAddress, ServerConfig, load_server_config
from webgl_devserver.errors import BindError, DevServerError, StartupFileError
from webgl_devserver.location import resolve_base_dir, strip_scheme_prefix

__version__ = "0.1.0"

__all__ = [
    "SCRIPT_MARKER",
    "AssembledDocument",
    "BindError",
    "DevServerError",
    "EnvironmentMode",
    "ListenAddress",
    "ServerConfig",
    "StartupFileError",
    "__version__",
    "assemble_document",
    "load_server_config",
    "resolve_base_dir",
    "strip_scheme_prefix",
]
