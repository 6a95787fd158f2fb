"""Poll a target until server-side image processing has finished."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from vws.api_client import Client, require_target_id
from vws.errors import ApiError, WaitCancelled, WaitTimeout
from vws.models import GetTargetRequest, GetTargetResponse

DEFAULT_INTERVAL = 5.0
EXTENDED_INTERVAL = 30.0

TERMINAL_STATUSES = frozenset({"success", "failed"})

logger = logging.getLogger(__name__)


def wait_until_processed(
    client: Client,
    target_id: str,
    cancel: Optional[threading.Event] = None,
    timeout: Optional[float] = None,
    default_interval: float = DEFAULT_INTERVAL,
    extended_interval: float = EXTENDED_INTERVAL,
) -> GetTargetResponse:
    """Block until ``target_id`` reports ``success`` or ``failed``.

    Sleeps ``default_interval`` before every poll. A ``RequestQuotaReached``
    error stretches the next sleep to ``extended_interval``; any other error
    from ``client.get_target`` is re-raised. A ``failed`` status is terminal
    but not an error: inspect the returned record.

    Setting ``cancel`` raises :class:`WaitCancelled` without polling again;
    running past ``timeout`` seconds raises :class:`WaitTimeout`.
    """
    require_target_id(target_id)
    if cancel is None:
        cancel = threading.Event()
    deadline = None if timeout is None else time.monotonic() + timeout
    interval = default_interval
    polls = 0

    while True:
        if cancel.is_set():
            raise WaitCancelled(target_id)

        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining < interval:
                if cancel.wait(max(remaining, 0.0)):
                    raise WaitCancelled(target_id)
                raise WaitTimeout(target_id, timeout)

        if cancel.wait(interval):
            raise WaitCancelled(target_id)
        interval = default_interval

        polls += 1
        try:
            response = client.get_target(GetTargetRequest(target_id=target_id))
        except ApiError as exc:
            if not exc.is_rate_limited:
                raise
            interval = extended_interval
            logger.debug(
                "WAIT rate limited target=%s poll=%s next_interval=%s",
                target_id,
                polls,
                interval,
            )
            continue

        status = response.status.lower()
        logger.debug("WAIT target=%s poll=%s status=%s", target_id, polls, status)
        if status in TERMINAL_STATUSES:
            return response
