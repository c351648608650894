"""Shared data models for email verification jobs."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

from .cancellation import CancellationToken


class _ServerEnum(str, Enum):
    """String enum which maps values unknown to this client onto UNKNOWN."""

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class JobStatus(_ServerEnum):
    UNKNOWN = "Unknown"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    DELETED = "Deleted"
    EXPIRED = "Expired"


class EntryStatus(_ServerEnum):
    UNKNOWN = "Unknown"
    SUCCESS = "Success"
    UNMATCHED_QUOTED_PAIR = "UnmatchedQuotedPair"
    UNEXPECTED_QUOTED_PAIR_SEQUENCE = "UnexpectedQuotedPairSequence"
    INVALID_WORD_BOUNDARY_START = "InvalidWordBoundaryStart"
    INVALID_CHARACTER_IN_SEQUENCE = "InvalidCharacterInSequence"
    UNBALANCED_COMMENT_PARENTHESIS = "UnbalancedCommentParenthesis"
    DOUBLE_DOT_SEQUENCE = "DoubleDotSequence"
    INVALID_LOCAL_PART_LENGTH = "InvalidLocalPartLength"
    INVALID_FOLDING_WHITE_SPACE_SEQUENCE = "InvalidFoldingWhiteSpaceSequence"
    AT_SIGN_NOT_FOUND = "AtSignNotFound"
    INVALID_EMPTY_QUOTED_WORD = "InvalidEmptyQuotedWord"
    INVALID_ADDRESS_LENGTH = "InvalidAddressLength"
    DOMAIN_PART_COMPLIANCY_FAILURE = "DomainPartCompliancyFailure"
    ISP_SPECIFIC_SYNTAX_FAILURE = "IspSpecificSyntaxFailure"
    LOCAL_PART_IS_WELL_KNOWN_ROLE_ACCOUNT = "LocalPartIsWellKnownRoleAccount"
    DNS_QUERY_TIMEOUT = "DnsQueryTimeout"
    DNS_CONNECTION_FAILURE = "DnsConnectionFailure"
    DOMAIN_DOES_NOT_EXIST = "DomainDoesNotExist"
    DOMAIN_IS_MISCONFIGURED = "DomainIsMisconfigured"
    DOMAIN_HAS_NULL_MX = "DomainHasNullMx"
    DOMAIN_IS_WELL_KNOWN_DEA = "DomainIsWellKnownDea"
    MAIL_EXCHANGER_IS_WELL_KNOWN_DEA = "MailExchangerIsWellKnownDea"
    MAILBOX_IS_DEA = "MailboxIsDea"
    SMTP_CONNECTION_TIMEOUT = "SmtpConnectionTimeout"
    SMTP_CONNECTION_FAILURE = "SmtpConnectionFailure"
    MAILBOX_DOES_NOT_EXIST = "MailboxDoesNotExist"
    MAILBOX_CONNECTION_FAILURE = "MailboxConnectionFailure"
    LOCAL_SENDER_ADDRESS_REJECTED = "LocalSenderAddressRejected"
    MAILBOX_VALIDATION_TIMEOUT = "MailboxValidationTimeout"
    MAILBOX_TEMPORARILY_UNAVAILABLE = "MailboxTemporarilyUnavailable"
    SERVER_DOES_NOT_SUPPORT_INTERNATIONAL_MAILBOXES = (
        "ServerDoesNotSupportInternationalMailboxes"
    )
    MAILBOX_HAS_INSUFFICIENT_STORAGE = "MailboxHasInsufficientStorage"
    CATCH_ALL_VALIDATION_TIMEOUT = "CatchAllValidationTimeout"
    SERVER_IS_CATCH_ALL = "ServerIsCatchAll"
    CATCH_ALL_CONNECTION_FAILURE = "CatchAllConnectionFailure"
    SERVER_TEMPORARY_UNAVAILABLE = "ServerTemporaryUnavailable"
    SMTP_DIALOG_ERROR = "SmtpDialogError"
    LOCAL_END_POINT_REJECTED = "LocalEndPointRejected"
    UNHANDLED_EXCEPTION = "UnhandledException"
    MAIL_EXCHANGER_IS_HONEYPOT = "MailExchangerIsHoneypot"
    UNACCEPTABLE_DOMAIN_LITERAL = "UnacceptableDomainLiteral"
    DUPLICATE = "Duplicate"


class Classification(_ServerEnum):
    UNKNOWN = "Unknown"
    DELIVERABLE = "Deliverable"
    RISKY = "Risky"
    UNDELIVERABLE = "Undeliverable"


class Quality(str, Enum):
    """Built-in quality levels; any other server-side level may be passed as a plain string."""

    STANDARD = "Standard"
    HIGH = "High"
    EXTREME = "Extreme"


class Deduplication(str, Enum):
    OFF = "Off"
    SAFE = "Safe"
    RELAXED = "Relaxed"


class LineEnding(str, Enum):
    AUTO = ""
    CRLF = "CrLf"
    CR = "Cr"
    LF = "Lf"


class Direction(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class Priority:
    LOWEST = 0
    NORMAL = 127
    HIGHEST = 255


@dataclass
class Progress:
    percentage: Decimal  # 0..1
    estimated_time_remaining: Optional[timedelta] = None


@dataclass
class JobOverview:
    id: str
    status: JobStatus
    created_on: Optional[datetime]
    submitted_on: Optional[datetime]
    completed_on: Optional[datetime]  # None while in progress
    no_of_entries: int
    quality: Optional[str] = None
    deduplication: Optional[str] = None
    priority: Optional[int] = None
    retention: Optional[timedelta] = None
    name: Optional[str] = None
    owner: Optional[str] = None
    client_ip: Optional[str] = None
    progress: Optional[Progress] = None


@dataclass
class JobEntry:
    index: int
    input_data: str
    status: EntryStatus
    classification: Classification
    custom: Optional[str] = None
    completed_on: Optional[datetime] = None
    email_address: Optional[str] = None
    email_address_local_part: Optional[str] = None
    email_address_domain_part: Optional[str] = None
    ascii_email_address_domain_part: Optional[str] = None
    has_international_domain_name: Optional[bool] = None
    has_international_mailbox_name: Optional[bool] = None
    is_disposable_email_address: Optional[bool] = None
    is_free_email_address: Optional[bool] = None
    is_role_account: Optional[bool] = None
    syntax_failure_index: Optional[int] = None
    duplicate_of: Optional[int] = None  # index of the first occurrence


@dataclass
class Job:
    overview: JobOverview
    entries: List[JobEntry] = field(default_factory=list)


@dataclass
class ListingPage:
    cursor: Optional[str]
    is_truncated: bool
    items: List[JobOverview]


@dataclass
class ListingResult:
    """One element of a listing walk: either an overview or the error which ended it."""

    overview: Optional[JobOverview] = None
    error: Optional[Exception] = None


@dataclass
class Balance:
    credit_packs: Decimal
    free_credits: Optional[Decimal] = None
    free_credits_reset_in: Optional[timedelta] = None


@dataclass
class RequestEntry:
    input_data: str
    custom: Optional[str] = None  # passed back untouched on the entry


EntryInput = Union[str, RequestEntry]


@dataclass
class SubmissionOptions:
    name: Optional[str] = None
    quality: Optional[str] = None
    deduplication: Optional[str] = None
    priority: Optional[int] = None
    retention: Optional[timedelta] = None
    completion_callback: Optional[str] = None
    submission_wait_time: Optional[timedelta] = None
    token: Optional[CancellationToken] = None


@dataclass
class FileSubmissionOptions:
    content_type: Optional[str] = None
    starting_row: int = 0
    ending_row: Optional[int] = None
    column: int = 0
    sheet: int = 0
    line_ending: LineEnding = LineEnding.AUTO
    delimiter: Optional[str] = None


@dataclass
class ListingOptions:
    limit: Optional[int] = None  # per page, advisory
    direction: Direction = Direction.FORWARD
    token: Optional[CancellationToken] = None
