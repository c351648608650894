"""Tests for the wire format helpers."""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from envelope_client.codec import (
    decode_balance,
    decode_job,
    decode_listing_page,
    decode_overview,
    decode_with,
    encode_file_settings,
    encode_validation_request,
    format_timespan,
    guess_content_type,
    parse_timespan,
    wait_time_param,
)
from envelope_client.errors import DecodingError
from envelope_client.models import (
    Classification,
    Deduplication,
    EntryStatus,
    FileSubmissionOptions,
    JobStatus,
    LineEnding,
    Quality,
    RequestEntry,
    SubmissionOptions,
)

from conftest import job_payload, overview_payload


class TestTimespan:
    """[days.]hours:minutes:seconds encoding."""

    @pytest.mark.parametrize("seconds", [0, 45, 90, 3661, 90061])
    def test_round_trip(self, seconds):
        duration = timedelta(seconds=seconds)
        assert parse_timespan(format_timespan(duration)) == duration

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0:0:0"),
            (45, "0:0:45"),
            (90, "0:1:30"),
            (3661, "1:1:1"),
            (90061, "1.1:1:1"),
            (86400, "1.0:0:0"),
            (30 * 86400, "30.0:0:0"),
        ],
    )
    def test_format(self, seconds, expected):
        assert format_timespan(timedelta(seconds=seconds)) == expected

    def test_parse_days(self):
        assert parse_timespan("2.03:04:05") == timedelta(days=2, hours=3, minutes=4, seconds=5)

    @pytest.mark.parametrize("text", ["", "1:2", "abc", "1.2.3:4:5", "-1:0:0"])
    def test_parse_rejects_garbage(self, text):
        with pytest.raises(DecodingError):
            parse_timespan(text)

    def test_negative_duration_is_rejected(self):
        with pytest.raises(ValueError):
            format_timespan(timedelta(seconds=-1))


class TestContentTypes:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("list.csv", "text/csv"),
            ("list.CSV", "text/csv"),
            ("list.txt", "text/plain"),
            ("list.tab", "text/tab-separated-values"),
            ("list.tsv", "text/tab-separated-values"),
            ("book.xls", "application/vnd.ms-excel"),
            (
                "book.xlsx",
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            ),
        ],
    )
    def test_known_extensions(self, name, expected):
        assert guess_content_type(name) == expected

    def test_unknown_extension(self):
        assert guess_content_type("list.pdf") is None
        assert guess_content_type("noextension") is None


class TestRequestEncoding:
    def test_minimal_request_only_has_entries(self):
        body = json.loads(encode_validation_request(["a@example.com"], None))
        assert body == {"entries": [{"inputData": "a@example.com"}]}

    def test_options_are_serialized(self):
        options = SubmissionOptions(
            name="march",
            quality=Quality.HIGH,
            deduplication=Deduplication.RELAXED,
            priority=0,
            retention=timedelta(minutes=30),
            completion_callback="https://example.com/done",
        )
        entries = [RequestEntry("a@example.com", custom="crm-1"), "b@example.com"]

        body = json.loads(encode_validation_request(entries, options))

        assert body["name"] == "march"
        assert body["quality"] == "High"
        assert body["deduplication"] == "Relaxed"
        assert body["priority"] == 0
        assert body["retention"] == "0:30:0"
        assert body["callback"] == {"url": "https://example.com/done"}
        assert body["entries"] == [
            {"inputData": "a@example.com", "custom": "crm-1"},
            {"inputData": "b@example.com"},
        ]

    def test_zero_retention_falls_back_to_account_default(self):
        options = SubmissionOptions(retention=timedelta(0))
        body = json.loads(encode_validation_request(["a@example.com"], options))
        assert "retention" not in body

    def test_priority_out_of_range(self):
        with pytest.raises(ValueError):
            encode_validation_request(["a@example.com"], SubmissionOptions(priority=256))

    def test_empty_entries_rejected(self):
        with pytest.raises(ValueError):
            encode_validation_request([], None)

    def test_file_settings(self):
        settings = FileSubmissionOptions(
            starting_row=1, ending_row=10, column=2, sheet=0,
            line_ending=LineEnding.CRLF, delimiter=";",
        )
        body = json.loads(encode_file_settings(settings, SubmissionOptions(quality="Extreme")))
        assert body == {
            "quality": "Extreme",
            "startingRow": 1,
            "endingRow": 10,
            "column": 2,
            "lineEnding": "CrLf",
            "delimiter": ";",
        }

    def test_wait_time_param(self):
        assert wait_time_param(None) == {}
        assert wait_time_param(timedelta(seconds=30)) == {"waitTime": "30"}
        assert wait_time_param(timedelta(milliseconds=1500)) == {"waitTime": "1.5"}


class TestResponseDecoding:
    def test_overview(self):
        overview = decode_overview(
            overview_payload(
                status="InProgress",
                priority=127,
                progress={"percentage": 0.25, "estimatedTimeRemaining": "0:0:42"},
            )
        )

        assert overview.status == JobStatus.IN_PROGRESS
        assert overview.completed_on is None
        assert overview.created_on == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
        assert overview.retention == timedelta(days=30)
        assert overview.priority == 127
        assert overview.progress.percentage == Decimal("0.25")
        assert overview.progress.estimated_time_remaining == timedelta(seconds=42)

    def test_unknown_status_falls_back(self):
        overview = decode_overview(overview_payload(status="Paused"))
        assert overview.status == JobStatus.UNKNOWN

    def test_job_without_entries(self):
        job = decode_job(job_payload(status="InProgress"))
        assert job.entries == []

    def test_job_entries(self):
        job = decode_job(
            job_payload(
                status="Completed",
                entries=[
                    {
                        "index": 0,
                        "inputData": "a@example.com",
                        "status": "Success",
                        "classification": "Deliverable",
                        "isFreeEmailAddress": True,
                    },
                    {
                        "index": 1,
                        "inputData": "a@example.com",
                        "status": "Duplicate",
                        "classification": "Unknown",
                        "duplicateOf": 0,
                    },
                    {
                        "index": 2,
                        "inputData": "x",
                        "status": "BrandNewStatus",
                        "classification": "Undeliverable",
                        "syntaxFailureIndex": 1,
                    },
                ],
            )
        )

        first, dup, odd = job.entries
        assert first.classification == Classification.DELIVERABLE
        assert first.is_free_email_address is True
        assert dup.status == EntryStatus.DUPLICATE
        assert dup.duplicate_of == 0
        assert odd.status == EntryStatus.UNKNOWN
        assert odd.syntax_failure_index == 1

    def test_job_without_overview(self):
        with pytest.raises(DecodingError):
            decode_job({"entries": {}})

    def test_bad_timestamp(self):
        with pytest.raises(DecodingError):
            decode_overview(overview_payload(createdOn="yesterday"))

    def test_decode_with_wraps_shape_errors(self):
        with pytest.raises(DecodingError):
            decode_with(decode_listing_page, {"data": "not-a-list-of-objects"})

    def test_listing_page(self):
        page = decode_listing_page(
            {
                "meta": {"cursor": "c2", "isTruncated": True},
                "data": [overview_payload("a"), overview_payload("b")],
            }
        )
        assert page.cursor == "c2"
        assert page.is_truncated is True
        assert [o.id for o in page.items] == ["a", "b"]

    def test_balance(self):
        balance = decode_balance(
            {"creditPacks": 10.5, "freeCredits": 25, "freeCreditsResetIn": "3:20:0"}
        )
        assert balance.credit_packs == Decimal("10.5")
        assert balance.free_credits == Decimal("25")
        assert balance.free_credits_reset_in == timedelta(hours=3, minutes=20)

    def test_balance_without_packs(self):
        with pytest.raises(DecodingError):
            decode_balance({"freeCredits": 1})
