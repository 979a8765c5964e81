"""
Path models — one tracked route (local interface + remote endpoint).
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, Field

# IFNAMSIZ minus the terminating NUL
IFNAME_MAX = 15
U64_MAX = 2**64 - 1


class PathState(IntEnum):
    EMPTY = 0  # unset / filter wildcard
    DOWN = 1
    BACKUP = 2
    UP = 3


class RateMode(IntEnum):
    AUTO = 1
    FIXED = 3


def check_interface_name(name: str) -> str:
    if len(name.encode()) > IFNAME_MAX:
        raise ValueError(f"interface name longer than {IFNAME_MAX} bytes: {name!r}")
    return name


class RemoteAddress(BaseModel):
    address: str
    port: int = 0


class RttStats(BaseModel):
    """Mean and variance, wire microseconds."""
    mean: int = 0
    var: int = 0


class PathConf(BaseModel):
    """Configuration snapshot reported with each path."""
    fixed_rate: bool = False
    preferred: bool = False
    loss_limit: int = Field(default=0, ge=0, le=255)
    rtt_limit: int = 0  # usec
    beat: int = 0  # usec


class TrafficStats(BaseModel):
    rate: int = 0
    loss: int = 0
    total: int = 0


class PathRecord(BaseModel):
    interface_name: str
    remote: Optional[RemoteAddress] = None
    state: PathState = PathState.EMPTY
    ok: bool = False
    mtu: int = 0
    rtt: RttStats = RttStats()
    conf: PathConf = PathConf()
    tx: TrafficStats = TrafficStats()
    rx: TrafficStats = TrafficStats()
