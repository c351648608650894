"""Tests for the completion poller."""

import threading
import time
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from envelope_client.cancellation import CancellationToken
from envelope_client.codec import decode_job
from envelope_client.errors import AggregateTransportError, CancelledError
from envelope_client.models import JobStatus
from envelope_client.waiting import CompletionPoller, WaitingOptions

from conftest import job_payload


def _job(status):
    return decode_job(job_payload("job-1", status))


class TestCompletionPoller:
    """Polling until a terminal status."""

    def test_polls_until_completed(self):
        """[InProgress, InProgress, Completed] means 3 fetches and 2 waits."""
        fetch = MagicMock(side_effect=[_job("InProgress"), _job("InProgress"), _job("Completed")])
        wait = MagicMock()
        poller = CompletionPoller(fetch, WaitingOptions(wait_for_next_poll=wait))

        initial = fetch("job-1", None, None)
        result = poller.wait_for_completion(initial)

        assert result.overview.status == JobStatus.COMPLETED
        assert fetch.call_count == 3
        assert wait.call_count == 2

    def test_terminal_snapshot_returns_immediately(self):
        fetch = MagicMock()
        wait = MagicMock()
        job = _job("Completed")

        result = CompletionPoller(fetch, WaitingOptions(wait_for_next_poll=wait)).wait_for_completion(job)

        assert result is job
        fetch.assert_not_called()
        wait.assert_not_called()

    @pytest.mark.parametrize("status", ["Expired", "Deleted", "SomethingNew"])
    def test_any_other_status_is_terminal(self, status):
        fetch = MagicMock()
        result = CompletionPoller(fetch).wait_for_completion(_job(status))

        assert result.overview.status != JobStatus.IN_PROGRESS
        fetch.assert_not_called()

    def test_cancel_during_first_wait(self):
        """Cancelling mid-wait should end the poll without fetching again."""
        token = CancellationToken()
        fetch = MagicMock()
        poller = CompletionPoller(fetch, WaitingOptions(token=token))
        threading.Timer(0.05, token.cancel).start()

        started = time.monotonic()
        with pytest.raises(CancelledError):
            poller.wait_for_completion(_job("InProgress"))

        assert time.monotonic() - started < 2
        fetch.assert_not_called()

    def test_already_cancelled_token(self):
        token = CancellationToken()
        token.cancel()
        fetch = MagicMock()

        with pytest.raises(CancelledError):
            CompletionPoller(fetch, WaitingOptions(token=token)).wait_for_completion(_job("InProgress"))

        fetch.assert_not_called()

    def test_custom_strategy_ignoring_cancellation_still_stops(self):
        token = CancellationToken()
        fetch = MagicMock()
        poller = CompletionPoller(
            fetch,
            WaitingOptions(token=token, wait_for_next_poll=lambda overview, tok: tok.cancel()),
        )

        with pytest.raises(CancelledError):
            poller.wait_for_completion(_job("InProgress"))

        fetch.assert_not_called()

    def test_fetch_error_ends_poll(self):
        """A failed re-fetch propagates and is not retried."""
        fetch = MagicMock(side_effect=AggregateTransportError([]))
        poller = CompletionPoller(fetch, WaitingOptions(wait_for_next_poll=MagicMock()))

        with pytest.raises(AggregateTransportError):
            poller.wait_for_completion(_job("InProgress"))

        assert fetch.call_count == 1

    def test_vanished_job_returns_none(self):
        fetch = MagicMock(return_value=None)
        poller = CompletionPoller(fetch, WaitingOptions(wait_for_next_poll=MagicMock()))

        assert poller.wait_for_completion(_job("InProgress")) is None

    def test_strategy_receives_overview_and_poll_wait_time_is_forwarded(self):
        fetch = MagicMock(return_value=_job("Completed"))
        wait = MagicMock()
        token = CancellationToken()
        poller = CompletionPoller(
            fetch,
            WaitingOptions(token=token, wait_for_next_poll=wait, poll_wait_time=timedelta(seconds=20)),
        )

        poller.wait_for_completion(_job("InProgress"))

        overview, passed_token = wait.call_args.args
        assert overview.id == "job-1"
        assert passed_token is token
        fetch.assert_called_once_with("job-1", timedelta(seconds=20), token)
