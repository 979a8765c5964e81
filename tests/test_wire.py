import errno
import struct

import pytest

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
from gtctl.models.path import PathState, RateMode
from gtctl.transport.wire import (
    CONTINUATION,
    MESSAGE_SIZE,
    decode_reply,
    decode_request,
    encode_reply,
    encode_request,
)

from fakes import make_record

# header (8) + interface name (16) + 4 flag bytes + mask (2) + pad (2) + tx, rx, beat
RTT_LIMIT_OFFSET = 8 + 16 + 4 + 2 + 2 + 3 * 8
# header + request section (56)
RECORD_NAME_OFFSET = 8 + 56
RECORD_STATE_OFFSET = RECORD_NAME_OFFSET + 16


def _raw(type_value: int, code: int) -> bytes:
    return struct.pack("!B3xi", type_value, code) + bytes(MESSAGE_SIZE - 8)


def test_messages_have_fixed_size():
    assert len(encode_request(ControlRequest.path_status())) == MESSAGE_SIZE
    assert len(encode_reply(ControlReply(type=ControlType.STATE, result=Done()))) == MESSAGE_SIZE


def test_result_codes():
    assert decode_reply(_raw(ControlType.PATH_STATUS, 0)).result == Done()
    failed = decode_reply(_raw(ControlType.PATH_STATUS, errno.EPERM)).result
    assert failed == Failed(code=errno.EPERM)


def test_continuation_carries_record():
    record = make_record("eth0")
    data = encode_reply(ControlReply(type=ControlType.PATH_STATUS, result=Continue(record=record)))
    assert struct.unpack_from("!i", data, 4)[0] == CONTINUATION
    reply = decode_reply(data)
    assert isinstance(reply.result, Continue)
    assert reply.result.record == record


def test_eagain_on_state_reply_is_a_failure():
    reply = decode_reply(_raw(ControlType.STATE, errno.EAGAIN))
    assert reply.result == Failed(code=errno.EAGAIN)


def test_record_without_remote_and_ipv6():
    for record in (make_record("wlan0", address=None), make_record("eth1", address="2001:db8::1")):
        data = encode_reply(ControlReply(type=ControlType.PATH_STATUS, result=Continue(record=record)))
        assert decode_reply(data).result.record == record


@pytest.mark.parametrize("data", [b"", b"\x01" * 10, bytes(MESSAGE_SIZE + 1)])
def test_bad_size_is_protocol_error(data):
    with pytest.raises(ProtocolError):
        decode_reply(data)


def test_unknown_type_is_protocol_error():
    with pytest.raises(ProtocolError):
        decode_reply(_raw(99, 0))


def test_bad_record_state_is_protocol_error():
    data = bytearray(_raw(ControlType.PATH_STATUS, CONTINUATION))
    data[RECORD_STATE_OFFSET] = 42
    with pytest.raises(ProtocolError):
        decode_reply(bytes(data))


def test_undecodable_name_of_full_length():
    data = bytearray(encode_reply(ControlReply(
        type=ControlType.PATH_STATUS, result=Continue(record=make_record("abcdefghijklmno")),
    )))
    data[RECORD_NAME_OFFSET + 14] = 0xFF
    reply = decode_reply(bytes(data))
    assert reply.result.record.interface_name == "abcdefghijklmn\ufffd"


def test_unterminated_name_is_protocol_error():
    data = bytearray(_raw(ControlType.PATH_STATUS, CONTINUATION))
    data[RECORD_NAME_OFFSET:RECORD_NAME_OFFSET + 16] = b"x" * 16
    data[RECORD_STATE_OFFSET] = PathState.UP
    with pytest.raises(ProtocolError, match="not terminated"):
        decode_reply(bytes(data))


def test_rtt_limit_is_big_endian_usec():
    patch = PathConfigRequest(interface_name="eth0", rtt_limit=250000)
    data = encode_request(ControlRequest.state(patch))
    assert data[RTT_LIMIT_OFFSET:RTT_LIMIT_OFFSET + 8] == (250000).to_bytes(8, "big")


def test_sparse_patch_keeps_explicit_zero():
    zero = decode_request(encode_request(ControlRequest.state(
        PathConfigRequest(interface_name="eth0", loss_limit=0, rate_tx=0)
    )))
    unset = decode_request(encode_request(ControlRequest.state(PathConfigRequest(interface_name="eth0"))))
    assert zero.payload.loss_limit == 0
    assert zero.payload.rate_tx == 0
    assert unset.payload.loss_limit is None
    assert unset.payload.changes() == {}


def test_state_request_fields():
    patch = PathConfigRequest(
        interface_name="eth0",
        state=PathState.BACKUP,
        rate_mode=RateMode.FIXED,
        rate_tx=1000,
        rate_rx=2000,
        beat=500000,
        preferred=True,
        loss_limit=127,
        rtt_limit=300000,
    )
    req = decode_request(encode_request(ControlRequest.state(patch)))
    assert req.type == ControlType.STATE
    assert req.payload == patch


def test_status_query_fields():
    query = PathStatusQuery(interface_name="eth1", state=PathState.UP)
    req = decode_request(encode_request(ControlRequest.path_status(query)))
    assert req.type == ControlType.PATH_STATUS
    assert req.payload == query
