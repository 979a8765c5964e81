"""
Path configuration — a single sparse-patch STATE request.
"""

import logging

from gtctl.client import ControlClient
from gtctl.errors import ArgumentError, ServerError
from gtctl.models.envelope import ControlRequest, Failed, PathConfigRequest

logger = logging.getLogger(__name__)


def validate_patch(patch: PathConfigRequest) -> None:
    if patch.changes() and not patch.interface_name:
        raise ArgumentError("interface required for mutation")


def configure_path(client: ControlClient, patch: PathConfigRequest) -> None:
    """Apply ``patch``; exactly one send and one receive."""
    validate_patch(patch)
    logger.debug("configure %s: %s", patch.interface_name, patch.changes())
    reply = client.request(ControlRequest.state(patch))
    if isinstance(reply.result, Failed):
        raise ServerError(reply.result.code)
