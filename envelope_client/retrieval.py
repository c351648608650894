"""Fetching and deleting jobs previously submitted."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from .cancellation import CancellationToken
from .codec import decode_job, decode_overview, decode_with, read_json, wait_time_param
from .errors import ProtocolError
from .models import Job, JobOverview
from .transport import InvocationRequest, MultiplexedTransport

_NOT_FOUND = (404, 410)


def get_job(
    transport: MultiplexedTransport,
    job_id: str,
    wait_time: Optional[timedelta] = None,
    token: Optional[CancellationToken] = None,
) -> Optional[Job]:
    """Fetch a job snapshot; None if the job is unknown, deleted or expired."""
    response = transport.invoke(
        InvocationRequest(
            method="GET",
            resource=f"email-validations/{job_id}",
            params=wait_time_param(wait_time),
            token=token,
        )
    )
    try:
        if response.status_code in (200, 202):
            return decode_with(decode_job, read_json(response))
        if response.status_code in _NOT_FOUND:
            return None
        raise ProtocolError(response.status_code)
    finally:
        response.close()


def get_overview(
    transport: MultiplexedTransport,
    job_id: str,
    wait_time: Optional[timedelta] = None,
    token: Optional[CancellationToken] = None,
) -> Optional[JobOverview]:
    response = transport.invoke(
        InvocationRequest(
            method="GET",
            resource=f"email-validations/{job_id}/overview",
            params=wait_time_param(wait_time),
            token=token,
        )
    )
    try:
        if response.status_code in (200, 202):
            return decode_with(decode_overview, read_json(response))
        if response.status_code in _NOT_FOUND:
            return None
        raise ProtocolError(response.status_code)
    finally:
        response.close()


def delete_job(
    transport: MultiplexedTransport,
    job_id: str,
    token: Optional[CancellationToken] = None,
) -> None:
    """Delete a job; deleting a job which is already gone is not an error."""
    response = transport.invoke(
        InvocationRequest(
            method="DELETE",
            resource=f"email-validations/{job_id}",
            token=token,
        )
    )
    try:
        if response.status_code == 200 or response.status_code in _NOT_FOUND:
            return
        raise ProtocolError(response.status_code)
    finally:
        response.close()
