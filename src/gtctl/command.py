"""
`path` command core — turn parsed options into one control exchange.

With no interface name, or an interface name and nothing to change, the
command enumerates path status (the state flag then acts as a filter).
Otherwise it sends one configuration patch.
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from gtctl.client import ControlClient
from gtctl.errors import ArgumentError
from gtctl.models.envelope import ControlRequest, ControlType, PathConfigRequest, PathStatusQuery
from gtctl.models.path import IFNAME_MAX, U64_MAX, PathRecord, PathState, RateMode
from gtctl.mutate import configure_path, validate_patch
from gtctl.status import path_status
from gtctl.transport.channel import Channel
from gtctl.units import USEC_PER_MSEC, loss_limit_to_wire, rate_to_wire, rtt_limit_to_wire

logger = logging.getLogger(__name__)


class PathOptions(BaseModel):
    """Options for one `path` invocation, in user units (beat already in usec)."""

    model_config = {"frozen": True}

    interface_name: Optional[str] = None
    state: PathState = PathState.EMPTY
    rate_mode: Optional[RateMode] = None
    rate_tx: Optional[int] = Field(default=None, ge=0, le=U64_MAX)  # bytes/sec
    rate_rx: Optional[int] = Field(default=None, ge=0, le=U64_MAX)  # bytes/sec
    beat: Optional[int] = Field(default=None, ge=0, le=U64_MAX)  # usec
    preferred: bool = False
    loss_limit: Optional[int] = Field(default=None, ge=0, le=100)  # percent
    rtt_limit: Optional[int] = Field(default=None, ge=0, le=U64_MAX // USEC_PER_MSEC)  # ms

    @property
    def sets_fields(self) -> bool:
        return self.preferred or any(
            v is not None
            for v in (self.rate_mode, self.rate_tx, self.rate_rx,
                      self.beat, self.loss_limit, self.rtt_limit)
        )


def _invalid(err: ValidationError) -> ArgumentError:
    first = err.errors()[0]
    loc = ".".join(str(p) for p in first["loc"])
    return ArgumentError(f"invalid {loc}: {first['msg']}")


def make_options(**fields) -> PathOptions:
    """Build :class:`PathOptions`, reporting bad values as ``ArgumentError``."""
    try:
        return PathOptions(**fields)
    except ValidationError as e:
        raise _invalid(e) from e


def _opt(value: Optional[int], convert) -> Optional[int]:
    return None if value is None else convert(value)


def plan_path(options: PathOptions) -> ControlRequest:
    """Validate ``options`` and build the request to send. No I/O."""
    name = options.interface_name or ""
    if len(name.encode()) > IFNAME_MAX:
        raise ArgumentError("interface name longer than maximum length")

    if not options.sets_fields and (not name or options.state == PathState.EMPTY):
        return ControlRequest.path_status(PathStatusQuery(interface_name=name, state=options.state))

    try:
        patch = PathConfigRequest(
            interface_name=name,
            state=options.state,
            rate_mode=options.rate_mode,
            rate_tx=_opt(options.rate_tx, rate_to_wire),
            rate_rx=_opt(options.rate_rx, rate_to_wire),
            beat=options.beat,
            preferred=True if options.preferred else None,
            loss_limit=_opt(options.loss_limit, loss_limit_to_wire),
            rtt_limit=_opt(options.rtt_limit, rtt_limit_to_wire),
        )
    except ValidationError as e:
        raise _invalid(e) from e
    validate_patch(patch)
    return ControlRequest.state(patch)


def execute_path(client: ControlClient, request: ControlRequest) -> list[PathRecord]:
    """Run the planned exchange; a configuration change returns no records."""
    if request.type == ControlType.STATE:
        configure_path(client, request.payload)  # type: ignore[arg-type]
        return []
    return path_status(client, request.payload)  # type: ignore[arg-type]


def run_path(options: PathOptions, channel: Channel) -> list[PathRecord]:
    request = plan_path(options)
    logger.debug("path: %s exchange", request.type.name)
    return execute_path(ControlClient(channel), request)
