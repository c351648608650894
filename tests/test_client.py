"""Tests for the high-level client facade."""

import os
from unittest.mock import MagicMock, patch

import pytest

from envelope_client import (
    CancellationToken,
    ClientConfig,
    ConfigurationError,
    JobStatus,
    VerifierClient,
    WaitingOptions,
)
from envelope_client.transport import CERTIFICATE_BASE_URLS, STANDARD_BASE_URLS

from conftest import job_payload


class TestConstruction:
    def test_basic_auth_uses_standard_endpoints(self):
        client = VerifierClient.with_basic_auth("user", "secret")
        assert client.transport.base_urls == tuple(STANDARD_BASE_URLS)
        client.close()

    def test_certificate_uses_mutual_tls_endpoints(self):
        client = VerifierClient.with_certificate("client.pem", "client.key")
        assert client.transport.base_urls == tuple(CERTIFICATE_BASE_URLS)
        client.close()

    def test_from_env_without_credentials(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                VerifierClient.from_env()

    def test_from_config_user_agent(self):
        client = VerifierClient.from_config(ClientConfig(app_key="key"), user_agent="ua/1")
        assert client.transport._user_agent == "ua/1"
        client.close()


class TestRun:
    """Submit followed by waiting, over a fake transport."""

    def test_run_waits_for_completion(self, transport, make_response):
        transport.invoke.side_effect = [
            make_response(202, job_payload("job-9", "InProgress")),
            make_response(202, job_payload("job-9", "InProgress")),
            make_response(200, job_payload("job-9", "Completed", [])),
        ]
        wait = MagicMock()
        client = VerifierClient(transport)

        job = client.run(["a@example.com"], waiting=WaitingOptions(wait_for_next_poll=wait))

        assert job.overview.status == JobStatus.COMPLETED
        assert wait.call_count == 2
        methods = [c.args[0].method for c in transport.invoke.call_args_list]
        assert methods == ["POST", "GET", "GET"]
        assert transport.invoke.call_args.args[0].resource == "email-validations/job-9"

    def test_poll_requests_carry_the_waiting_token(self, transport, make_response):
        token = CancellationToken()
        transport.invoke.side_effect = [
            make_response(202, job_payload("job-9", "InProgress")),
            make_response(200, job_payload("job-9", "Completed", [])),
        ]
        client = VerifierClient(transport)

        client.run("a@example.com", waiting=WaitingOptions(token=token, wait_for_next_poll=MagicMock()))

        assert transport.invoke.call_args.args[0].token is token

    def test_list_jobs_is_lazy(self, transport):
        client = VerifierClient(transport)
        client.list_jobs()
        transport.invoke.assert_not_called()
