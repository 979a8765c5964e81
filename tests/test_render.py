import io

from rich.console import Console

from gtctl.models.path import PathState
from gtctl.render import format_line, format_verbose, render_records

from fakes import make_record


def _console(terminal: bool) -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, force_terminal=terminal, color_system=None, width=80), buf


def test_machine_line():
    line = format_line(make_record("eth0"))
    assert line == (
        "path UP OK eth0 -> 192.0.2.1 5000 1420 12.345 0.678 auto NOT_PREFERRED"
        " 50 250 100 1000 1 42 2000 0 84"
    )


def test_machine_line_unknown_remote():
    fields = format_line(make_record("eth0", address=None, ok=False)).split()
    assert fields[2] == "DEGRADED"
    assert fields[5:7] == ["-", "-"]


def test_verbose_block():
    block = format_verbose(make_record("eth0", PathState.BACKUP))
    lines = block.splitlines()
    assert lines[0] == "path BACKUP"
    assert "  remote:    192.0.2.1 port 5000" in lines
    assert "  rtt:       12.345 ms" in lines
    assert "  losslim:   50%" in lines
    assert "  rttlim:    250 ms" in lines
    assert "  beat:      100 ms" in lines


def test_render_picks_mode_and_skips_empty():
    records = [make_record("eth0"), make_record("eth1", PathState.EMPTY), make_record("eth2", PathState.DOWN)]

    console, buf = _console(terminal=False)
    render_records(records, console)
    lines = buf.getvalue().splitlines()
    assert [line.split()[3] for line in lines] == ["eth0", "eth2"]

    console, buf = _console(terminal=True)
    render_records(records, console)
    out = buf.getvalue()
    assert "path UP\n" in out
    assert "  interface: eth2" in out
    assert "eth1" not in out
