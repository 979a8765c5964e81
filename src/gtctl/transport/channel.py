"""
Control channel — Unix datagram socket to the daemon.

Daemon sockets live in a run directory, one per tunnel device. The client
binds its own hidden socket in the same directory so the daemon can reply,
and removes it on close.
"""

import contextlib
import itertools
import logging
import os
import socket
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from gtctl.errors import (
    ConnectError,
    ControlIOError,
    ControlTimeoutError,
    ManyDevicesError,
    NoDeviceError,
)
from gtctl.transport.wire import MESSAGE_SIZE

DEFAULT_RUN_DIR = "/run/glorytun"

logger = logging.getLogger(__name__)

_local_ids = itertools.count()


class Channel(ABC):
    """One open control channel; released with ``close()`` or ``with``."""

    @abstractmethod
    def send(self, data: bytes) -> None:
        ...

    @abstractmethod
    def recv(self) -> bytes:
        ...

    @abstractmethod
    def close(self) -> None:
        ...

    def __enter__(self) -> "Channel":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class UnixChannel(Channel):
    def __init__(
        self,
        sock: socket.socket,
        local_path: Optional[Path] = None,
        timeout: Optional[float] = None,
    ):
        self._sock = sock
        self._local_path = local_path
        self._timeout = timeout
        sock.settimeout(timeout)

    def send(self, data: bytes) -> None:
        try:
            self._sock.send(data)
        except OSError as e:
            raise ControlIOError(f"send failed: {e.strerror or e}") from e

    def recv(self) -> bytes:
        try:
            # one extra byte so an oversized datagram is caught by the size check
            return self._sock.recv(MESSAGE_SIZE + 1)
        except socket.timeout as e:
            raise ControlTimeoutError(self._timeout or 0.0) from e
        except OSError as e:
            raise ControlIOError(f"recv failed: {e.strerror or e}") from e

    def close(self) -> None:
        self._sock.close()
        if self._local_path is not None:
            with contextlib.suppress(FileNotFoundError):
                self._local_path.unlink()
            self._local_path = None


def find_device(run_dir: Union[str, Path] = DEFAULT_RUN_DIR, dev: Optional[str] = None) -> Path:
    """Resolve the daemon socket for ``dev``, or the only one present."""
    run_dir = Path(run_dir)
    if dev:
        return run_dir / dev
    try:
        names = sorted(p.name for p in run_dir.iterdir() if not p.name.startswith("."))
    except FileNotFoundError:
        raise NoDeviceError() from None
    except OSError as e:
        raise ConnectError(f"couldn't read {run_dir}: {e.strerror or e}") from e
    if not names:
        raise NoDeviceError()
    if len(names) > 1:
        raise ManyDevicesError(names)
    return run_dir / names[0]


def connect(
    dev: Optional[str] = None,
    run_dir: Union[str, Path] = DEFAULT_RUN_DIR,
    timeout: Optional[float] = None,
) -> UnixChannel:
    """Open a channel to the daemon serving ``dev``."""
    server = find_device(run_dir, dev)
    local = Path(run_dir) / f".{os.getpid()}-{next(_local_ids)}"
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
    try:
        with contextlib.suppress(FileNotFoundError):
            local.unlink()
        sock.bind(str(local))
        sock.connect(str(server))
    except OSError as e:
        sock.close()
        with contextlib.suppress(FileNotFoundError):
            local.unlink()
        raise ConnectError(f"couldn't connect to {server}: {e.strerror or e}") from e
    logger.debug("connected %s -> %s", local, server)
    return UnixChannel(sock, local_path=local, timeout=timeout)
