"""
Path record output.

An interactive terminal gets one verbose block per path; anything else gets
one whitespace-delimited line per path with the same fields in the same order.
"""

from typing import Iterable

from rich.console import Console

from gtctl.models.path import PathRecord, PathState
from gtctl.units import loss_limit_to_percent, rtt_to_msec, usec_to_msec

SHOWN_STATES = (PathState.UP, PathState.BACKUP, PathState.DOWN)


def _remote(record: PathRecord) -> tuple[str, str]:
    if record.remote is None:
        return "-", "-"
    return record.remote.address, str(record.remote.port)


def format_verbose(record: PathRecord) -> str:
    address, port = _remote(record)
    conf = record.conf
    return "\n".join([
        f"path {record.state.name}",
        f"  status:    {'OK' if record.ok else 'DEGRADED'}",
        f"  interface: {record.interface_name}",
        f"  remote:    {address} port {port}",
        f"  mtu:       {record.mtu} bytes",
        f"  rtt:       {rtt_to_msec(record.rtt.mean):.3f} ms",
        f"  rttvar:    {rtt_to_msec(record.rtt.var):.3f} ms",
        f"  rate:      {'fixed' if conf.fixed_rate else 'auto'}",
        f"  preferred: {'PREFERRED' if conf.preferred else 'NOT PREFERRED'}",
        f"  losslim:   {loss_limit_to_percent(conf.loss_limit)}%",
        f"  rttlim:    {usec_to_msec(conf.rtt_limit)} ms",
        f"  beat:      {usec_to_msec(conf.beat)} ms",
        "  tx:",
        f"    rate:  {record.tx.rate} bytes/sec",
        f"    loss:  {record.tx.loss} percent",
        f"    total: {record.tx.total} packets",
        "  rx:",
        f"    rate:  {record.rx.rate} bytes/sec",
        f"    loss:  {record.rx.loss} percent",
        f"    total: {record.rx.total} packets",
    ])


def format_line(record: PathRecord) -> str:
    address, port = _remote(record)
    conf = record.conf
    fields = [
        "path", record.state.name,
        "OK" if record.ok else "DEGRADED",
        record.interface_name, "->", address, port,
        record.mtu,
        f"{rtt_to_msec(record.rtt.mean):.3f}",
        f"{rtt_to_msec(record.rtt.var):.3f}",
        "fixed" if conf.fixed_rate else "auto",
        "PREFERRED" if conf.preferred else "NOT_PREFERRED",
        loss_limit_to_percent(conf.loss_limit),
        usec_to_msec(conf.rtt_limit),
        usec_to_msec(conf.beat),
        record.tx.rate, record.tx.loss, record.tx.total,
        record.rx.rate, record.rx.loss, record.rx.total,
    ]
    return " ".join(str(f) for f in fields)


def render_records(records: Iterable[PathRecord], console: Console) -> None:
    fmt = format_verbose if console.is_terminal else format_line
    for record in records:
        if record.state not in SHOWN_STATES:
            continue
        console.print(fmt(record), markup=False, highlight=False, soft_wrap=True)
