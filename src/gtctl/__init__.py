"""
gtctl — control client for the glorytun multipath tunnel daemon.

Inspect and change per-path state over the daemon's local control socket.
"""

__version__ = "0.1.0"

from gtctl.client import ControlClient
from gtctl.command import PathOptions, make_options, plan_path, execute_path, run_path
from gtctl.errors import (
    GtCtlError,
    ArgumentError,
    ConfigError,
    ConnectError,
    NoDeviceError,
    ManyDevicesError,
    ProtocolError,
    ServerError,
    ControlIOError,
    ControlTimeoutError,
)
from gtctl.models.envelope import ControlRequest, ControlReply, ControlType, PathConfigRequest, PathStatusQuery
from gtctl.models.path import PathRecord, PathState, RateMode
from gtctl.mutate import configure_path
from gtctl.status import path_status
from gtctl.transport.channel import connect

__all__ = [
    "ControlClient",
    "PathOptions",
    "make_options",
    "plan_path",
    "execute_path",
    "run_path",
    "GtCtlError",
    "ArgumentError",
    "ConfigError",
    "ConnectError",
    "NoDeviceError",
    "ManyDevicesError",
    "ProtocolError",
    "ServerError",
    "ControlIOError",
    "ControlTimeoutError",
    "ControlRequest",
    "ControlReply",
    "ControlType",
    "PathConfigRequest",
    "PathStatusQuery",
    "PathRecord",
    "PathState",
    "RateMode",
    "configure_path",
    "path_status",
    "connect",
]
