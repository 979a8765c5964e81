"""
Control channel client — one send, then one or more type-checked replies.

The client never retries; channel failures surface as ``ControlIOError``.
"""

import logging
from typing import Iterator

from gtctl.errors import ProtocolError
from gtctl.models.envelope import Continue, ControlReply, ControlRequest
from gtctl.transport.channel import Channel
from gtctl.transport.wire import decode_reply, encode_request

logger = logging.getLogger(__name__)


class ControlClient:
    def __init__(self, channel: Channel):
        self._channel = channel

    def send(self, request: ControlRequest) -> None:
        logger.debug("send %s %s", request.type.name, request.payload)
        self._channel.send(encode_request(request))

    def receive(self, request: ControlRequest) -> ControlReply:
        """Read one reply and check it answers ``request``."""
        reply = decode_reply(self._channel.recv())
        logger.debug("recv %s %s", reply.type.name, reply.result.kind)
        if reply.type != request.type:
            raise ProtocolError(
                f"malformed response: expected {request.type.name}, got {reply.type.name}"
            )
        return reply

    def request(self, request: ControlRequest) -> ControlReply:
        """Single round trip."""
        self.send(request)
        return self.receive(request)

    def stream(self, request: ControlRequest) -> Iterator[ControlReply]:
        """Send once, then yield replies up to and including the terminal one."""
        self.send(request)
        while True:
            reply = self.receive(request)
            yield reply
            if not isinstance(reply.result, Continue):
                return
