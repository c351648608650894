"""Wire format helpers: time spans, content types and JSON payload mapping."""

from __future__ import annotations

import json
import os
import re
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

import requests

from .errors import DecodingError
from .models import (
    Balance,
    Classification,
    EntryInput,
    EntryStatus,
    FileSubmissionOptions,
    Job,
    JobEntry,
    JobOverview,
    JobStatus,
    ListingPage,
    Progress,
    RequestEntry,
    SubmissionOptions,
)

JSON_CONTENT_TYPE = "application/json"

CONTENT_TYPES = {
    ".txt": "text/plain",
    ".csv": "text/csv",
    ".tsv": "text/tab-separated-values",
    ".tab": "text/tab-separated-values",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

_TIMESPAN_RE = re.compile(r"^(?:(\d+)\.)?(\d{1,2}):(\d{1,2}):(\d{1,2})$")

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 60 * _SECONDS_PER_MINUTE
_SECONDS_PER_DAY = 24 * _SECONDS_PER_HOUR


# --------------------------
# Time spans
# --------------------------


def format_timespan(duration: timedelta) -> str:
    """Format a duration as ``[days.]hours:minutes:seconds``.

    The ``days.`` prefix is emitted only when the span covers at least one
    full day; sub-second precision is dropped.
    """
    total = int(duration.total_seconds())
    if total < 0:
        raise ValueError("Negative time spans are not supported")

    days, total = divmod(total, _SECONDS_PER_DAY)
    hours, total = divmod(total, _SECONDS_PER_HOUR)
    minutes, seconds = divmod(total, _SECONDS_PER_MINUTE)

    prefix = f"{days}." if days > 0 else ""
    return f"{prefix}{hours}:{minutes}:{seconds}"


def parse_timespan(text: str) -> timedelta:
    """Inverse of ``format_timespan``; raises DecodingError on malformed input."""
    match = _TIMESPAN_RE.match(text.strip())
    if not match:
        raise DecodingError(f"Invalid time span: {text!r}")

    days, hours, minutes, seconds = match.groups()
    return timedelta(
        days=int(days) if days else 0,
        hours=int(hours),
        minutes=int(minutes),
        seconds=int(seconds),
    )


def _optional_timespan(value: Optional[str]) -> Optional[timedelta]:
    return parse_timespan(value) if value else None


# --------------------------
# Content types
# --------------------------


def guess_content_type(filename: str) -> Optional[str]:
    """Look up the MIME type for a file name's extension; None if unknown."""
    _, ext = os.path.splitext(filename)
    return CONTENT_TYPES.get(ext.lower())


# --------------------------
# Requests
# --------------------------


def _options_payload(options: Optional[SubmissionOptions]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    if options is None:
        return payload

    if options.name:
        payload["name"] = options.name
    if options.quality:
        payload["quality"] = _text(options.quality)
    if options.deduplication:
        payload["deduplication"] = _text(options.deduplication)
    if options.priority is not None:
        if not 0 <= options.priority <= 255:
            raise ValueError("priority must be between 0 and 255")
        payload["priority"] = options.priority
    if options.retention:
        payload["retention"] = format_timespan(options.retention)
    if options.completion_callback:
        payload["callback"] = {"url": options.completion_callback}
    return payload


def _text(value: Any) -> str:
    # str-based enums would otherwise render as "Quality.HIGH"
    return getattr(value, "value", value)


def normalize_entries(entries: Any) -> List[RequestEntry]:
    if isinstance(entries, (str, RequestEntry)):
        entries = [entries]

    result = []
    for item in entries:
        if isinstance(item, RequestEntry):
            result.append(item)
        elif isinstance(item, str):
            result.append(RequestEntry(input_data=item))
        else:
            raise TypeError(f"Unsupported entry type: {type(item).__name__}")
    if not result:
        raise ValueError("At least one entry is required")
    return result


def encode_validation_request(
    entries: Sequence[EntryInput], options: Optional[SubmissionOptions]
) -> bytes:
    body = _options_payload(options)
    rows = []
    for entry in normalize_entries(entries):
        row = {"inputData": entry.input_data}
        if entry.custom:
            row["custom"] = entry.custom
        rows.append(row)
    body["entries"] = rows
    return json.dumps(body).encode("utf-8")


def encode_file_settings(
    file_options: FileSubmissionOptions, options: Optional[SubmissionOptions]
) -> bytes:
    body = _options_payload(options)
    if file_options.starting_row:
        body["startingRow"] = file_options.starting_row
    if file_options.ending_row is not None:
        body["endingRow"] = file_options.ending_row
    if file_options.column:
        body["column"] = file_options.column
    if file_options.sheet:
        body["sheet"] = file_options.sheet
    line_ending = _text(file_options.line_ending)
    if line_ending:
        body["lineEnding"] = line_ending
    if file_options.delimiter:
        body["delimiter"] = file_options.delimiter
    return json.dumps(body).encode("utf-8")


def wait_time_param(wait_time: Optional[timedelta]) -> Dict[str, str]:
    if wait_time is None:
        return {}
    return {"waitTime": f"{wait_time.total_seconds():g}"}


# --------------------------
# Responses
# --------------------------


def read_json(response: requests.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise DecodingError(f"Malformed JSON response: {e}") from e
    if not isinstance(data, dict):
        raise DecodingError("Expected a JSON object in the response body")
    return data


def _datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise DecodingError(f"Invalid timestamp: {value!r}") from e


def _decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise DecodingError(f"Invalid decimal value: {value!r}") from e


def decode_overview(data: Dict[str, Any]) -> JobOverview:
    try:
        job_id = data["id"]
    except (KeyError, TypeError) as e:
        raise DecodingError("Job overview is missing its id") from e

    progress = None
    raw_progress = data.get("progress")
    if raw_progress:
        progress = Progress(
            percentage=_decimal(raw_progress.get("percentage")) or Decimal(0),
            estimated_time_remaining=_optional_timespan(
                raw_progress.get("estimatedTimeRemaining")
            ),
        )

    return JobOverview(
        id=str(job_id),
        status=JobStatus(data.get("status") or "Unknown"),
        created_on=_datetime(data.get("createdOn")),
        submitted_on=_datetime(data.get("submittedOn")),
        completed_on=_datetime(data.get("completedOn")),
        no_of_entries=int(data.get("noOfEntries") or 0),
        quality=data.get("quality"),
        deduplication=data.get("deduplication"),
        priority=data.get("priority"),
        retention=_optional_timespan(data.get("retention")),
        name=data.get("name"),
        owner=data.get("owner"),
        client_ip=data.get("clientIP"),
        progress=progress,
    )


def decode_entry(data: Dict[str, Any]) -> JobEntry:
    return JobEntry(
        index=int(data.get("index") or 0),
        input_data=data.get("inputData") or "",
        status=EntryStatus(data.get("status") or "Unknown"),
        classification=Classification(data.get("classification") or "Unknown"),
        custom=data.get("custom"),
        completed_on=_datetime(data.get("completedOn")),
        email_address=data.get("emailAddress"),
        email_address_local_part=data.get("emailAddressLocalPart"),
        email_address_domain_part=data.get("emailAddressDomainPart"),
        ascii_email_address_domain_part=data.get("asciiEmailAddressDomainPart"),
        has_international_domain_name=data.get("hasInternationalDomainName"),
        has_international_mailbox_name=data.get("hasInternationalMailboxName"),
        is_disposable_email_address=data.get("isDisposableEmailAddress"),
        is_free_email_address=data.get("isFreeEmailAddress"),
        is_role_account=data.get("isRoleAccount"),
        syntax_failure_index=data.get("syntaxFailureIndex"),
        duplicate_of=data.get("duplicateOf"),
    )


def decode_job(data: Dict[str, Any]) -> Job:
    """Decode a job payload; the entries segment may be missing entirely."""
    if "overview" not in data:
        raise DecodingError("Job payload is missing its overview")

    entries: List[JobEntry] = []
    segment = data.get("entries") or {}
    for raw in segment.get("data") or []:
        entries.append(decode_entry(raw))

    return Job(overview=decode_overview(data["overview"]), entries=entries)


def decode_listing_page(data: Dict[str, Any]) -> ListingPage:
    meta = data.get("meta") or {}
    return ListingPage(
        cursor=meta.get("cursor"),
        is_truncated=bool(meta.get("isTruncated")),
        items=[decode_overview(item) for item in data.get("data") or []],
    )


def decode_balance(data: Dict[str, Any]) -> Balance:
    if "creditPacks" not in data:
        raise DecodingError("Balance payload is missing creditPacks")
    return Balance(
        credit_packs=_decimal(data["creditPacks"]),
        free_credits=_decimal(data.get("freeCredits")),
        free_credits_reset_in=_optional_timespan(data.get("freeCreditsResetIn")),
    )


def decode_with(decoder, data: Dict[str, Any]):
    """Run a decoder, turning shape errors into DecodingError."""
    try:
        return decoder(data)
    except DecodingError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DecodingError(f"Unexpected response payload: {e}") from e
