"""
Fixed-size binary envelope for the control socket.

Every datagram is exactly ``MESSAGE_SIZE`` bytes, all integers network order:

    header    type u8, 3 pad, result code i32
    request   path config / status query fields, plus a presence mask
    response  one path record (PATH_STATUS continuations only)

The result code is 0 when done, ``EAGAIN`` when one record is enclosed and
more follow, and a daemon errno otherwise.
"""

import errno
import ipaddress
import struct
from typing import Optional

from pydantic import ValidationError

from gtctl.errors import ProtocolError
from gtctl.models.envelope import (
    Continue,
    ControlReply,
    ControlRequest,
    ControlType,
    Done,
    Failed,
    PathConfigRequest,
    PathStatusQuery,
)
from gtctl.models.path import (
    IFNAME_MAX,
    PathConf,
    PathRecord,
    PathState,
    RateMode,
    RemoteAddress,
    RttStats,
    TrafficStats,
)

CONTINUATION = errno.EAGAIN

_HEADER = struct.Struct("!B3xi")
_REQUEST = struct.Struct("!16s BBBB H2x QQQQ")
_RECORD = struct.Struct("!16s BBBx 16s H2x I QQ BBBx QQ QQQ QQQ")

MESSAGE_SIZE = _HEADER.size + _REQUEST.size + _RECORD.size

# presence mask bits; the wire cannot tell an explicit zero from "unset"
SET_STATE = 1 << 0
SET_RATE_MODE = 1 << 1
SET_RATE_TX = 1 << 2
SET_RATE_RX = 1 << 3
SET_BEAT = 1 << 4
SET_PREFERRED = 1 << 5
SET_LOSS_LIMIT = 1 << 6
SET_RTT_LIMIT = 1 << 7

_MASK_FIELDS = (
    (SET_RATE_TX, "rate_tx"),
    (SET_RATE_RX, "rate_rx"),
    (SET_BEAT, "beat"),
    (SET_PREFERRED, "preferred"),
    (SET_LOSS_LIMIT, "loss_limit"),
    (SET_RTT_LIMIT, "rtt_limit"),
)

_ADDR_V4 = 4
_ADDR_V6 = 6


def _pack_name(name: str) -> bytes:
    return name.encode().ljust(16, b"\0")


def _unpack_name(raw: bytes) -> str:
    name = raw.split(b"\0", 1)[0]
    if len(name) > IFNAME_MAX:
        raise ValueError(f"interface name not terminated: {name!r}")
    # the kernel allows any bytes; undecodable ones are shown as U+FFFD
    return name.decode(errors="replace")


def _pack_request(req: ControlRequest) -> bytes:
    p = req.payload
    if isinstance(p, PathStatusQuery):
        mask = SET_STATE if p.state != PathState.EMPTY else 0
        return _REQUEST.pack(_pack_name(p.interface_name), p.state, 0, 0, 0, mask, 0, 0, 0, 0)

    mask = 0
    if p.state != PathState.EMPTY:
        mask |= SET_STATE
    if p.rate_mode is not None:
        mask |= SET_RATE_MODE
    for bit, name in _MASK_FIELDS:
        if getattr(p, name) is not None:
            mask |= bit
    return _REQUEST.pack(
        _pack_name(p.interface_name),
        p.state,
        int(bool(p.preferred)),
        p.rate_mode or 0,
        p.loss_limit or 0,
        mask,
        p.rate_tx or 0,
        p.rate_rx or 0,
        p.beat or 0,
        p.rtt_limit or 0,
    )


def _unpack_request(type_: ControlType, raw: bytes) -> ControlRequest:
    (name, state, preferred, fixed_rate, loss_limit, mask,
     rate_tx, rate_rx, beat, rtt_limit) = _REQUEST.unpack(raw)
    if type_ == ControlType.PATH_STATUS:
        return ControlRequest.path_status(
            PathStatusQuery(interface_name=_unpack_name(name), state=PathState(state))
        )
    values = {
        "rate_tx": rate_tx,
        "rate_rx": rate_rx,
        "beat": beat,
        "preferred": bool(preferred),
        "loss_limit": loss_limit,
        "rtt_limit": rtt_limit,
    }
    fields = {name_: values[name_] for bit, name_ in _MASK_FIELDS if mask & bit}
    if mask & SET_RATE_MODE:
        fields["rate_mode"] = RateMode(fixed_rate)
    return ControlRequest.state(
        PathConfigRequest(interface_name=_unpack_name(name), state=PathState(state), **fields)
    )


def _pack_record(record: Optional[PathRecord]) -> bytes:
    if record is None:
        return bytes(_RECORD.size)
    family, addr, port = 0, b"", 0
    if record.remote is not None:
        ip = ipaddress.ip_address(record.remote.address)
        family = _ADDR_V4 if ip.version == 4 else _ADDR_V6
        addr, port = ip.packed, record.remote.port
    conf = record.conf
    return _RECORD.pack(
        _pack_name(record.interface_name),
        record.state, int(record.ok), family,
        addr.ljust(16, b"\0"), port,
        record.mtu,
        record.rtt.mean, record.rtt.var,
        int(conf.fixed_rate), int(conf.preferred), conf.loss_limit,
        conf.rtt_limit, conf.beat,
        record.tx.rate, record.tx.loss, record.tx.total,
        record.rx.rate, record.rx.loss, record.rx.total,
    )


def _unpack_record(raw: bytes) -> PathRecord:
    (name, state, ok, family, addr, port, mtu, rtt_mean, rtt_var,
     fixed_rate, preferred, loss_limit, rtt_limit, beat,
     tx_rate, tx_loss, tx_total, rx_rate, rx_loss, rx_total) = _RECORD.unpack(raw)
    remote = None
    if family == _ADDR_V4:
        remote = RemoteAddress(address=str(ipaddress.IPv4Address(addr[:4])), port=port)
    elif family == _ADDR_V6:
        remote = RemoteAddress(address=str(ipaddress.IPv6Address(addr)), port=port)
    return PathRecord(
        interface_name=_unpack_name(name),
        remote=remote,
        state=PathState(state),
        ok=bool(ok),
        mtu=mtu,
        rtt=RttStats(mean=rtt_mean, var=rtt_var),
        conf=PathConf(
            fixed_rate=bool(fixed_rate),
            preferred=bool(preferred),
            loss_limit=loss_limit,
            rtt_limit=rtt_limit,
            beat=beat,
        ),
        tx=TrafficStats(rate=tx_rate, loss=tx_loss, total=tx_total),
        rx=TrafficStats(rate=rx_rate, loss=rx_loss, total=rx_total),
    )


def _split(data: bytes) -> tuple[ControlType, int, bytes, bytes]:
    if len(data) != MESSAGE_SIZE:
        raise ProtocolError(f"bad message size {len(data)}, expected {MESSAGE_SIZE}")
    type_value, code = _HEADER.unpack_from(data)
    try:
        type_ = ControlType(type_value)
    except ValueError:
        raise ProtocolError(f"unknown message type {type_value}") from None
    body = data[_HEADER.size:]
    return type_, code, body[:_REQUEST.size], body[_REQUEST.size:]


def encode_request(req: ControlRequest) -> bytes:
    """Build an outbound envelope; the response section is zeroed."""
    return _HEADER.pack(req.type, 0) + _pack_request(req) + _pack_record(None)


def decode_reply(data: bytes) -> ControlReply:
    """Parse an inbound envelope into a three-way result."""
    type_, code, _, record = _split(data)
    try:
        if code == 0:
            return ControlReply(type=type_, result=Done())
        if code == CONTINUATION and type_ == ControlType.PATH_STATUS:
            return ControlReply(type=type_, result=Continue(record=_unpack_record(record)))
        return ControlReply(type=type_, result=Failed(code=code))
    except (ValueError, ValidationError) as e:
        raise ProtocolError(f"malformed path record: {e}") from e


def encode_reply(reply: ControlReply) -> bytes:
    """Daemon side of :func:`decode_reply`."""
    result = reply.result
    record = None
    if isinstance(result, Continue):
        if reply.type != ControlType.PATH_STATUS:
            raise ValueError("only PATH_STATUS replies carry records")
        code, record = CONTINUATION, result.record
    elif isinstance(result, Failed):
        code = result.code
    else:
        code = 0
    return _HEADER.pack(reply.type, code) + bytes(_REQUEST.size) + _pack_record(record)


def decode_request(data: bytes) -> ControlRequest:
    """Daemon side of :func:`encode_request`."""
    type_, _, request, _ = _split(data)
    try:
        return _unpack_request(type_, request)
    except (ValueError, ValidationError) as e:
        raise ProtocolError(f"malformed request: {e}") from e
