"""
Unit translation between user-facing values and wire encodings.

Wire time values (RTT, RTT limit, beat) are microseconds; loss limits are a
0-255 scale. Rates are bytes/sec on both sides.
"""

LOSS_LIMIT_WIRE_MAX = 255
USEC_PER_MSEC = 1000


def loss_limit_to_wire(percent: int) -> int:
    """Percent in [0, 100] -> wire 0-255 scale (floored)."""
    if not 0 <= percent <= 100:
        raise ValueError(f"loss limit must be between 0 and 100, got {percent}")
    return percent * LOSS_LIMIT_WIRE_MAX // 100


def loss_limit_to_percent(wire: int) -> int:
    return round(wire / LOSS_LIMIT_WIRE_MAX * 100)


def rtt_limit_to_wire(ms: int) -> int:
    if ms < 0:
        raise ValueError(f"rtt limit must not be negative, got {ms}")
    return ms * USEC_PER_MSEC


def usec_to_msec(wire: int) -> int:
    """Whole milliseconds, as displayed for RTT limit and beat."""
    return wire // USEC_PER_MSEC


def rtt_to_msec(wire: int) -> float:
    """RTT mean/variance in fractional milliseconds."""
    return wire / USEC_PER_MSEC


def rate_to_wire(rate: int) -> int:
    return rate
