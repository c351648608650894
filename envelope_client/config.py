"""Client configuration loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .auth import (
    DEFAULT_TIMEOUT,
    AppKeyAuthProvider,
    AuthProvider,
    BasicAuthProvider,
    CertificateAuthProvider,
)
from .errors import ConfigurationError
from .transport import CERTIFICATE_BASE_URLS, STANDARD_BASE_URLS


@dataclass
class ClientConfig:
    """Credentials and endpoints for one client.

    Exactly one authentication mode is used, picked in this order: client
    certificate, app key, username/password.
    """

    username: Optional[str] = None
    password: Optional[str] = None
    app_key: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    base_urls: List[str] = field(default_factory=list)  # empty: the mode's defaults

    @classmethod
    def from_env(cls) -> "ClientConfig":
        raw_urls = os.getenv("VERIFALIA_BASE_URLS") or ""
        raw_timeout = os.getenv("VERIFALIA_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"Invalid VERIFALIA_TIMEOUT: {raw_timeout!r}") from e

        return cls(
            username=os.getenv("VERIFALIA_USERNAME") or None,
            password=os.getenv("VERIFALIA_PASSWORD") or "",
            app_key=os.getenv("VERIFALIA_APP_KEY") or None,
            cert_file=os.getenv("VERIFALIA_CERT_FILE") or None,
            key_file=os.getenv("VERIFALIA_KEY_FILE") or None,
            timeout=timeout,
            base_urls=[url.strip() for url in raw_urls.split(",") if url.strip()],
        )

    def build_auth_provider(self) -> AuthProvider:
        if self.cert_file:
            return CertificateAuthProvider(self.cert_file, self.key_file, timeout=self.timeout)
        if self.app_key:
            return AppKeyAuthProvider(self.app_key, timeout=self.timeout)
        if self.username:
            return BasicAuthProvider(self.username, self.password or "", timeout=self.timeout)
        raise ConfigurationError(
            "No credential configured: set VERIFALIA_USERNAME/VERIFALIA_PASSWORD, "
            "VERIFALIA_APP_KEY or VERIFALIA_CERT_FILE"
        )

    def resolve_base_urls(self) -> List[str]:
        if self.base_urls:
            return list(self.base_urls)
        if self.cert_file:
            return list(CERTIFICATE_BASE_URLS)
        return list(STANDARD_BASE_URLS)
