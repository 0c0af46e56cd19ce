from __future__ import annotations

import socket
import sys

from webgl_devserver.config import ListenAddress
from webgl_devserver.errors import BindError


def bind_listener(address: ListenAddress) -> socket.socket:
    """Bind and listen on `address` so a busy port fails before uvicorn starts.

    There is no retry and no fallback port.
    """

    family = socket.AF_INET6 if ":" in address.host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        if sys.platform != "win32":
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((address.host, address.port))
        sock.listen(socket.SOMAXCONN)
    except OSError as exc:
        sock.close()
        raise BindError(
            f"Cannot listen on {address.host}:{address.port}: {exc.strerror or exc}",
            address=address,
        ) from exc
    return sock
