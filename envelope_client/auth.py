"""Authentication providers: basic credentials, app keys and client certificates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union, runtime_checkable

import requests
from requests.auth import HTTPBasicAuth

from .errors import ConfigurationError

DEFAULT_TIMEOUT = 30.0

CertSpec = Union[str, Tuple[str, str]]


@dataclass(frozen=True)
class TransportConfig:
    """Settings applied to the shared HTTP session."""

    timeout: float = DEFAULT_TIMEOUT
    cert: Optional[CertSpec] = None


@runtime_checkable
class AuthProvider(Protocol):
    """Signs outgoing requests and describes the session they travel on."""

    def sign(self, request: requests.PreparedRequest) -> None: ...

    def build_transport_config(self) -> TransportConfig: ...

    def handle_unauthorized(self) -> None: ...


class BasicAuthProvider:
    """Username/password pair sent as HTTP basic auth."""

    def __init__(self, username: str, password: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.username = username
        self.password = password
        self.timeout = timeout

    def sign(self, request: requests.PreparedRequest) -> None:
        if not self.username:
            raise ConfigurationError(
                "Empty username, please specify a valid value before authenticating"
            )
        HTTPBasicAuth(self.username, self.password)(request)

    def build_transport_config(self) -> TransportConfig:
        return TransportConfig(timeout=self.timeout)

    def handle_unauthorized(self) -> None:
        pass


class AppKeyAuthProvider:
    """Browser app key, sent as the basic auth username with an empty password."""

    def __init__(self, app_key: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.app_key = app_key
        self.timeout = timeout

    def sign(self, request: requests.PreparedRequest) -> None:
        if not self.app_key:
            raise ConfigurationError(
                "Empty app key, please specify a valid value before authenticating"
            )
        HTTPBasicAuth(self.app_key, "")(request)

    def build_transport_config(self) -> TransportConfig:
        return TransportConfig(timeout=self.timeout)

    def handle_unauthorized(self) -> None:
        pass


class CertificateAuthProvider:
    """X.509 client certificate for mutual TLS; requests are not signed."""

    def __init__(
        self,
        cert_file: str,
        key_file: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not cert_file:
            raise ConfigurationError("A client certificate file is required")
        self.cert_file = cert_file
        self.key_file = key_file
        self.timeout = timeout

    def sign(self, request: requests.PreparedRequest) -> None:
        pass

    def build_transport_config(self) -> TransportConfig:
        cert: CertSpec = (
            (self.cert_file, self.key_file) if self.key_file else self.cert_file
        )
        return TransportConfig(timeout=self.timeout, cert=cert)

    def handle_unauthorized(self) -> None:
        pass
