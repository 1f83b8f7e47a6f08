"""
Pydantic model for engine configuration.
Provides robust validation for all settings.
"""

import re
from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator, model_validator

from mediafetch import __version__

# The origin grants roughly this much unthrottled data per new connection.
DEFAULT_BURST_SIZE = 10 * 1024 * 1024

DEFAULT_CAPTCHA_HOSTS = [
    "www.google.com/sorry",
    "ipv4.google.com/sorry",
    "ipv6.google.com/sorry",
    "consent.youtube.com",
]

_PROXY_REGEX = re.compile(
    r"^(?:(?P<scheme>[a-z][a-z0-9+.-]*)://)?(?P<host>[^:/\s]+)(?::(?P<port>\d{1,5}))?/?$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ProxySpec:
    """An upstream HTTP proxy, parsed from `scheme://host:port` or `host:port`."""

    scheme: str
    host: str
    port: int

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


def parse_proxy(value: str) -> ProxySpec:
    """Parses a proxy string, defaulting to http and port 80/443."""
    match = _PROXY_REGEX.match(value.strip())
    if not match:
        raise ValueError(f"Unparsable proxy: '{value}'")
    scheme = (match.group("scheme") or "http").lower()
    if scheme not in ("http", "https"):
        raise ValueError(f"Unsupported proxy scheme '{scheme}' in '{value}'")
    port = match.group("port")
    if port is None:
        port = 443 if scheme == "https" else 80
    port = int(port)
    if not 0 < port < 65536:
        raise ValueError(f"Proxy port out of range in '{value}'")
    return ProxySpec(scheme=scheme, host=match.group("host"), port=port)


class FetchConfig(BaseModel):
    """A validated configuration model for the retrieval engine."""

    # Network
    proxy: str | None = None
    user_agent: str = f"mediafetch/{__version__}"
    connect_timeout: float = 30.0
    idle_timeout: float = 30.0
    buffer_size: int = 64 * 1024

    # Bandwidth
    bandwidth_limit: int | None = None  # bits per second
    bandwidth_window: float | None = None  # seconds; None measures from start

    # Segmentation
    max_workers: int = 30
    segment_threshold: int = DEFAULT_BURST_SIZE
    min_chunk_size: int = 10 * 1024

    # Supervisor budgets
    max_redirects: int = 20
    max_resumes: int = 5
    error_budget: int = 5
    retry_delay: float = 1.0

    # Permanent-failure patterns
    captcha_hosts: list[str] = Field(default_factory=lambda: list(DEFAULT_CAPTCHA_HOSTS))
    rate_limit_pattern: str = r"rate.?limit|too many requests|unusual traffic"

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("proxy")
    @classmethod
    def validate_proxy(cls, v: str | None) -> str | None:
        """Normalises empty proxies to None and rejects unparsable ones."""
        if not v:
            return None
        parse_proxy(v)
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensures a reasonable number of workers."""
        if v < 1 or v > 64:
            raise ValueError("Max workers must be between 1 and 64.")
        return v

    @field_validator("bandwidth_limit")
    @classmethod
    def validate_bandwidth(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            return None
        return v

    @field_validator("idle_timeout", "connect_timeout")
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be positive.")
        return v

    @field_validator("min_chunk_size", "buffer_size")
    @classmethod
    def validate_sizes(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Sizes must be at least one byte.")
        return v

    @field_validator("rate_limit_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid rate-limit pattern: {e}") from e
        return v

    @model_validator(mode="after")
    def validate_budgets(self) -> "FetchConfig":
        """Checks that the supervisor budgets are non-negative."""
        for name in ("max_redirects", "max_resumes", "error_budget"):
            if getattr(self, name) < 0:
                raise ValueError(f"'{name}' cannot be negative.")
        if self.retry_delay < 0:
            raise ValueError("'retry_delay' cannot be negative.")
        return self

    @property
    def proxy_spec(self) -> ProxySpec | None:
        return parse_proxy(self.proxy) if self.proxy else None

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        return set(cls.model_fields)
