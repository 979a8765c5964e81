"""Basic unit tests for the gtctl package."""

import errno

from gtctl import (
    ArgumentError,
    ConnectError,
    ControlIOError,
    ControlTimeoutError,
    GtCtlError,
    ManyDevicesError,
    NoDeviceError,
    ProtocolError,
    ServerError,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_error_hierarchy():
    for cls in (ArgumentError, ConnectError, ProtocolError, ServerError, ControlIOError):
        assert issubclass(cls, GtCtlError)
    assert issubclass(NoDeviceError, ConnectError)
    assert issubclass(ManyDevicesError, ConnectError)
    assert issubclass(ControlTimeoutError, ControlIOError)


def test_error_attributes():
    err = GtCtlError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    server = ServerError(errno.ENOENT)
    assert server.errno == errno.ENOENT
    assert server.details == {"errno": errno.ENOENT}
    assert str(server) == "No such file or directory"

    many = ManyDevicesError(["tun0", "tun1"])
    assert many.code == "many_devices"
    assert many.details == {"devices": ["tun0", "tun1"]}
    assert str(NoDeviceError()) == "no device"
