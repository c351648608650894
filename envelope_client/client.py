"""High-level client tying the transport to every job and credit operation."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterator, Optional, Sequence, Union

from . import credits, listing, retrieval, submission
from .auth import AppKeyAuthProvider, AuthProvider, BasicAuthProvider, CertificateAuthProvider
from .cancellation import CancellationToken
from .config import ClientConfig
from .models import (
    Balance,
    EntryInput,
    FileSubmissionOptions,
    Job,
    JobOverview,
    ListingOptions,
    ListingResult,
    SubmissionOptions,
)
from .transport import CERTIFICATE_BASE_URLS, STANDARD_BASE_URLS, MultiplexedTransport
from .waiting import CompletionPoller, WaitingOptions


class VerifierClient:
    """Submit, wait for, list and delete email verification jobs.

    Example::

        client = VerifierClient.with_basic_auth("user", "secret")
        job = client.run(["batman@gmail.com", "robin@example.com"])
        for entry in job.entries:
            print(entry.input_data, entry.classification.value)
    """

    def __init__(self, transport: MultiplexedTransport) -> None:
        self.transport = transport

    @classmethod
    def from_config(cls, config: ClientConfig, user_agent: Optional[str] = None) -> "VerifierClient":
        transport = MultiplexedTransport(
            config.build_auth_provider(), config.resolve_base_urls(), user_agent=user_agent
        )
        return cls(transport)

    @classmethod
    def from_env(cls) -> "VerifierClient":
        return cls.from_config(ClientConfig.from_env())

    @classmethod
    def with_auth(cls, auth: AuthProvider, base_urls: Sequence[str]) -> "VerifierClient":
        return cls(MultiplexedTransport(auth, base_urls))

    @classmethod
    def with_basic_auth(cls, username: str, password: str) -> "VerifierClient":
        return cls.with_auth(BasicAuthProvider(username, password), STANDARD_BASE_URLS)

    @classmethod
    def with_app_key(cls, app_key: str) -> "VerifierClient":
        return cls.with_auth(AppKeyAuthProvider(app_key), STANDARD_BASE_URLS)

    @classmethod
    def with_certificate(cls, cert_file: str, key_file: Optional[str] = None) -> "VerifierClient":
        return cls.with_auth(CertificateAuthProvider(cert_file, key_file), CERTIFICATE_BASE_URLS)

    # Submission

    def submit(
        self,
        entries: Union[EntryInput, Sequence[EntryInput]],
        options: Optional[SubmissionOptions] = None,
    ) -> Job:
        return submission.submit_entries(self.transport, entries, options)

    def submit_file(
        self,
        source: submission.FileSource,
        file_options: Optional[FileSubmissionOptions] = None,
        options: Optional[SubmissionOptions] = None,
    ) -> Job:
        return submission.submit_file(self.transport, source, file_options, options)

    # Retrieval

    def get_job(
        self,
        job_id: str,
        wait_time: Optional[timedelta] = None,
        token: Optional[CancellationToken] = None,
    ) -> Optional[Job]:
        return retrieval.get_job(self.transport, job_id, wait_time, token)

    def get_overview(
        self,
        job_id: str,
        wait_time: Optional[timedelta] = None,
        token: Optional[CancellationToken] = None,
    ) -> Optional[JobOverview]:
        return retrieval.get_overview(self.transport, job_id, wait_time, token)

    def delete_job(self, job_id: str, token: Optional[CancellationToken] = None) -> None:
        retrieval.delete_job(self.transport, job_id, token)

    # Waiting

    def wait_for_completion(
        self, job: Job, options: Optional[WaitingOptions] = None
    ) -> Optional[Job]:
        return CompletionPoller(self.get_job, options).wait_for_completion(job)

    def run(
        self,
        entries: Union[EntryInput, Sequence[EntryInput]],
        options: Optional[SubmissionOptions] = None,
        waiting: Optional[WaitingOptions] = None,
    ) -> Optional[Job]:
        """Submit entries and block until the job completes."""
        return self.wait_for_completion(self.submit(entries, options), waiting)

    def run_file(
        self,
        source: submission.FileSource,
        file_options: Optional[FileSubmissionOptions] = None,
        options: Optional[SubmissionOptions] = None,
        waiting: Optional[WaitingOptions] = None,
    ) -> Optional[Job]:
        job = self.submit_file(source, file_options, options)
        return self.wait_for_completion(job, waiting)

    # Listing and credits

    def list_jobs(self, options: Optional[ListingOptions] = None) -> Iterator[ListingResult]:
        return listing.iter_jobs(self.transport, options)

    def get_balance(self, token: Optional[CancellationToken] = None) -> Balance:
        return credits.get_balance(self.transport, token)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "VerifierClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
