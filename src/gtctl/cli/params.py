"""Click parameter types for `gt path` values."""

import re
from decimal import Decimal

import click

_BYTE_SUFFIXES = {"": 1, "k": 10**3, "m": 10**6, "g": 10**9, "t": 10**12}
_TIME_SUFFIXES = {"": 10**6, "ms": 10**3, "s": 10**6, "m": 60 * 10**6, "h": 3600 * 10**6}

_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")


def _split(value: str) -> tuple[Decimal, str]:
    match = _NUMBER.match(value)
    if not match:
        raise ValueError(value)
    return Decimal(match.group(1)), match.group(2).lower()


class ByteRate(click.ParamType):
    """Bytes/sec, with an optional k/m/g/t suffix (powers of 1000)."""

    name = "bytes/sec"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            number, suffix = _split(str(value))
            return int(number * _BYTE_SUFFIXES[suffix])
        except (ValueError, KeyError):
            self.fail(f"{value!r} is not a byte rate", param, ctx)


class Duration(click.ParamType):
    """Seconds (or ms/s/m/h suffixed), converted to microseconds."""

    name = "seconds"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            number, suffix = _split(str(value))
            return int(number * _TIME_SUFFIXES[suffix])
        except (ValueError, KeyError):
            self.fail(f"{value!r} is not a duration", param, ctx)


BYTE_RATE = ByteRate()
DURATION = Duration()
