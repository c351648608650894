"""Client for the Verifalia email verification REST API."""

__version__ = "0.2.0"

from .auth import (  # noqa: E402
    AppKeyAuthProvider,
    AuthProvider,
    BasicAuthProvider,
    CertificateAuthProvider,
    TransportConfig,
)
from .cancellation import CancellationToken  # noqa: E402
from .client import VerifierClient  # noqa: E402
from .codec import format_timespan, guess_content_type, parse_timespan  # noqa: E402
from .config import ClientConfig  # noqa: E402
from .errors import (  # noqa: E402
    AggregateTransportError,
    AuthenticationError,
    CancelledError,
    ConfigurationError,
    DecodingError,
    ProtocolError,
    SubmissionError,
    TransportError,
    UnresolvedContentTypeError,
    VerifierError,
)
from .models import (  # noqa: E402
    Balance,
    Classification,
    Deduplication,
    Direction,
    EntryStatus,
    FileSubmissionOptions,
    Job,
    JobEntry,
    JobOverview,
    JobStatus,
    LineEnding,
    ListingOptions,
    ListingPage,
    ListingResult,
    Priority,
    Progress,
    Quality,
    RequestEntry,
    SubmissionOptions,
)
from .transport import (  # noqa: E402
    CERTIFICATE_BASE_URLS,
    STANDARD_BASE_URLS,
    InvocationRequest,
    MultiplexedTransport,
)
from .waiting import CompletionPoller, WaitingOptions  # noqa: E402

__all__ = [
    "AggregateTransportError",
    "AppKeyAuthProvider",
    "AuthProvider",
    "AuthenticationError",
    "Balance",
    "BasicAuthProvider",
    "CERTIFICATE_BASE_URLS",
    "CancellationToken",
    "CancelledError",
    "CertificateAuthProvider",
    "Classification",
    "ClientConfig",
    "CompletionPoller",
    "ConfigurationError",
    "DecodingError",
    "Deduplication",
    "Direction",
    "EntryStatus",
    "FileSubmissionOptions",
    "InvocationRequest",
    "Job",
    "JobEntry",
    "JobOverview",
    "JobStatus",
    "LineEnding",
    "ListingOptions",
    "ListingPage",
    "ListingResult",
    "MultiplexedTransport",
    "Priority",
    "Progress",
    "ProtocolError",
    "Quality",
    "RequestEntry",
    "STANDARD_BASE_URLS",
    "SubmissionError",
    "SubmissionOptions",
    "TransportConfig",
    "TransportError",
    "UnresolvedContentTypeError",
    "VerifierClient",
    "VerifierError",
    "WaitingOptions",
    "format_timespan",
    "guess_content_type",
    "parse_timespan",
]
