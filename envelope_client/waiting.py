"""Polling a job until it leaves the in-progress state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional

from .cancellation import CancellationToken
from .errors import CancelledError
from .models import Job, JobOverview, JobStatus

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0

WaitStrategy = Callable[[JobOverview, CancellationToken], None]
JobFetcher = Callable[[str, Optional[timedelta], CancellationToken], Optional[Job]]


def default_wait_for_next_poll(overview: JobOverview, token: CancellationToken) -> None:
    """Sleep for the polling interval, or until the token fires."""
    if token.wait(DEFAULT_POLL_INTERVAL):
        raise CancelledError("Waiting for the job completion has been cancelled")


@dataclass
class WaitingOptions:
    token: Optional[CancellationToken] = None
    # Must raise CancelledError when the token fires
    wait_for_next_poll: WaitStrategy = default_wait_for_next_poll
    # Server-side wait requested on every re-fetch
    poll_wait_time: Optional[timedelta] = None


class CompletionPoller:
    """Re-fetches a job until its status is anything but in-progress.

    The poller never retries a failed fetch: errors raised by ``fetch``
    propagate straight to the caller and end the poll.
    """

    def __init__(self, fetch: JobFetcher, options: Optional[WaitingOptions] = None) -> None:
        self._fetch = fetch
        self._options = options or WaitingOptions()

    def wait_for_completion(self, job: Job) -> Optional[Job]:
        """Return the first terminal snapshot, or None if the job vanished."""
        token = self._options.token or CancellationToken()
        current = job

        while current.overview.status == JobStatus.IN_PROGRESS:
            self._options.wait_for_next_poll(current.overview, token)
            token.raise_if_cancelled()

            job_id = current.overview.id
            refreshed = self._fetch(job_id, self._options.poll_wait_time, token)
            if refreshed is None:
                logger.info("Job %s is gone while waiting for its completion", job_id)
                return None
            current = refreshed

        logger.info("Job %s is %s", current.overview.id, current.overview.status.value)
        return current
