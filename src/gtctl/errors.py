"""
gtctl error types — every failure surfaced to the `path` command.
"""

import os
from typing import Any, Optional


class GtCtlError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ArgumentError(GtCtlError):
    def __init__(self, message: str):
        super().__init__("argument_error", message)


class ConnectError(GtCtlError):
    def __init__(self, message: str = "couldn't connect", code: str = "connect_error"):
        super().__init__(code, message)


class NoDeviceError(ConnectError):
    def __init__(self, message: str = "no device"):
        super().__init__(message, code="no_device")


class ManyDevicesError(ConnectError):
    def __init__(self, devices: list[str]):
        super().__init__("please choose a device", code="many_devices")
        self.details = {"devices": devices}


class ProtocolError(GtCtlError):
    def __init__(self, message: str = "malformed response"):
        super().__init__("protocol_error", message)


class ServerError(GtCtlError):
    """Terminal nonzero result code returned by the daemon."""

    def __init__(self, errno: int):
        super().__init__("server_error", os.strerror(errno), {"errno": errno})
        self.errno = errno


class ControlIOError(GtCtlError):
    def __init__(self, message: str, code: str = "io_error"):
        super().__init__(code, message)


class ControlTimeoutError(ControlIOError):
    def __init__(self, timeout: float):
        super().__init__(f"no reply from daemon after {timeout}s", code="timeout")


class ConfigError(GtCtlError):
    def __init__(self, message: str):
        super().__init__("config_error", message)
