"""
gt CLI — `gt` command.

Commands:
  gt path [IFNAME]         Show path status, or change one path
"""

import sys

try:
    import click
except ImportError:
    raise SystemExit("CLI requires extras: pip install gtctl[cli]")

from gtctl import __version__
from gtctl.log import setup_logging


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
def main(verbose: bool):
    """Control a running glorytun daemon."""
    setup_logging(verbose=verbose)


# Register subcommands from separate modules
from gtctl.cli.path import path_cmd

main.add_command(path_cmd)


def run() -> None:
    """Console entry point; every failure exits with status 1."""
    try:
        code = main.main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(code or 0)


if __name__ == "__main__":
    run()
