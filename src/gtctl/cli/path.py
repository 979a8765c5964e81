"""CLI: gt path [IFNAME] [options]"""

import logging
from typing import Optional

import click
from rich.console import Console

from gtctl.command import execute_path, make_options, plan_path
from gtctl.client import ControlClient
from gtctl.config import load_settings
from gtctl.errors import ArgumentError, GtCtlError, ManyDevicesError
from gtctl.models.path import PathState, RateMode
from gtctl.render import render_records
from gtctl.transport.channel import connect
from gtctl.cli.params import BYTE_RATE, DURATION

console = Console()
logger = logging.getLogger(__name__)


def _state(up: bool, backup: bool, down: bool) -> PathState:
    chosen = [s for s, on in ((PathState.UP, up), (PathState.BACKUP, backup), (PathState.DOWN, down)) if on]
    if len(chosen) > 1:
        raise ArgumentError("--up, --backup and --down are mutually exclusive")
    return chosen[0] if chosen else PathState.EMPTY


def _report(err: GtCtlError) -> None:
    click.echo(f"path: {err}", err=True)
    if isinstance(err, ManyDevicesError):
        click.echo(f"path: available devices: {', '.join(err.details['devices'])}", err=True)


@click.command("path")
@click.argument("ifname", required=False)
@click.option("--dev", metavar="NAME", default=None, help="Tunnel device")
@click.option("--up", is_flag=True, help="Set the path UP")
@click.option("--backup", is_flag=True, help="Set the path as BACKUP")
@click.option("--down", is_flag=True, help="Set the path DOWN")
@click.option("--rate", "rate_mode", type=click.Choice(["fixed", "auto"]), default=None)
@click.option("--tx", "rate_tx", type=BYTE_RATE, metavar="BYTES/SEC", default=None)
@click.option("--rx", "rate_rx", type=BYTE_RATE, metavar="BYTES/SEC", default=None)
@click.option("--beat", type=DURATION, metavar="SECONDS", default=None)
@click.option("--preferred", is_flag=True, help="Prefer this path among UP paths")
@click.option("--losslimit", "loss_limit", type=click.IntRange(0, 100), metavar="PERCENT", default=None)
@click.option("--rttlimit", "rtt_limit", type=click.IntRange(min=0), metavar="MS", default=None)
@click.pass_context
def path_cmd(
    ctx: click.Context,
    ifname: Optional[str],
    dev: Optional[str],
    up: bool,
    backup: bool,
    down: bool,
    rate_mode: Optional[str],
    rate_tx: Optional[int],
    rate_rx: Optional[int],
    beat: Optional[int],
    preferred: bool,
    loss_limit: Optional[int],
    rtt_limit: Optional[int],
):
    """Show or change the paths of a tunnel."""
    try:
        options = make_options(
            interface_name=ifname,
            state=_state(up, backup, down),
            rate_mode=RateMode[rate_mode.upper()] if rate_mode else None,
            rate_tx=rate_tx,
            rate_rx=rate_rx,
            beat=beat,
            preferred=preferred,
            loss_limit=loss_limit,
            rtt_limit=rtt_limit,
        )
        request = plan_path(options)
        settings = load_settings()
        with connect(dev or settings.device, settings.run_dir, settings.timeout) as channel:
            records = execute_path(ControlClient(channel), request)
    except GtCtlError as e:
        logger.debug("path failed: %s", e.code)
        _report(e)
        ctx.exit(1)
    render_records(records, console)
