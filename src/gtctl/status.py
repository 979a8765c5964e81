"""
Path status enumeration.

One PATH_STATUS request, then records arrive one per reply until a terminal
reply. Any failure discards what was collected so far.
"""

import logging
from typing import Iterable, Optional

from gtctl.client import ControlClient
from gtctl.errors import ServerError
from gtctl.models.envelope import Continue, ControlRequest, Failed, PathStatusQuery
from gtctl.models.path import PathRecord, PathState

logger = logging.getLogger(__name__)


def filter_records(
    records: Iterable[PathRecord],
    state: PathState = PathState.EMPTY,
    interface_name: Optional[str] = None,
) -> list[PathRecord]:
    """State filter first, then exact interface name; arrival order kept."""
    if state != PathState.EMPTY:
        records = [r for r in records if r.state == state]
    if interface_name:
        records = [r for r in records if r.interface_name == interface_name]
    return list(records)


def path_status(client: ControlClient, query: Optional[PathStatusQuery] = None) -> list[PathRecord]:
    query = query or PathStatusQuery()
    records: list[PathRecord] = []
    for reply in client.stream(ControlRequest.path_status(query)):
        result = reply.result
        if isinstance(result, Continue):
            records.append(result.record)
        elif isinstance(result, Failed):
            raise ServerError(result.code)
    logger.debug("received %d path records", len(records))
    # the daemon may ignore the filters, apply them here as well
    return filter_records(records, query.state, query.interface_name)
