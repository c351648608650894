"""Shared fixtures for the client tests."""

import os
import sys
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def build_response(status_code=200, payload=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload if payload is not None else {}
    return response


def overview_payload(job_id="job-1", status="InProgress", **extra):
    payload = {
        "id": job_id,
        "status": status,
        "createdOn": "2024-03-01T10:00:00Z",
        "submittedOn": "2024-03-01T10:00:01.1234567Z",
        "noOfEntries": 2,
        "quality": "Standard",
        "deduplication": "Off",
        "retention": "30.0:0:0",
    }
    if status != "InProgress":
        payload["completedOn"] = "2024-03-01T10:00:05Z"
    payload.update(extra)
    return payload


def job_payload(job_id="job-1", status="InProgress", entries=None):
    payload = {"overview": overview_payload(job_id, status)}
    if entries is not None:
        payload["entries"] = {"meta": {"isTruncated": False}, "data": entries}
    return payload


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def transport():
    return MagicMock()
