import pytest

from gtctl.units import (
    loss_limit_to_percent,
    loss_limit_to_wire,
    rate_to_wire,
    rtt_limit_to_wire,
    rtt_to_msec,
    usec_to_msec,
)


def test_loss_limit_to_wire():
    assert loss_limit_to_wire(0) == 0
    assert loss_limit_to_wire(100) == 255
    assert loss_limit_to_wire(50) == 127
    assert loss_limit_to_wire(1) == 2


@pytest.mark.parametrize("percent", [-1, 101])
def test_loss_limit_out_of_range(percent):
    with pytest.raises(ValueError):
        loss_limit_to_wire(percent)


def test_loss_limit_display():
    assert loss_limit_to_percent(0) == 0
    assert loss_limit_to_percent(255) == 100
    assert loss_limit_to_percent(127) == 50


def test_rtt_limit():
    assert rtt_limit_to_wire(250) == 250000
    assert usec_to_msec(250000) == 250
    with pytest.raises(ValueError):
        rtt_limit_to_wire(-5)


def test_display_conversions():
    assert rtt_to_msec(12345) == pytest.approx(12.345)
    assert usec_to_msec(100999) == 100
    assert rate_to_wire(123456) == 123456
