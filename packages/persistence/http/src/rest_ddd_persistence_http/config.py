"""HTTP backend configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

_PROTOCOLS = frozenset({"http", "https"})


@dataclass(frozen=True)
class HttpConfig:
    """Connection settings for a REST backend.

    Attributes:
        host: Host name, with an optional port (``api.local:8080``).
        protocol: ``http`` or ``https``.
        base_path: Optional path prefix shared by every resource.
        headers: Default headers sent with every request.
        timeout: Transport timeout in seconds.
    """

    host: str
    protocol: str = "https"
    base_path: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = 10.0

    def __post_init__(self) -> None:
        protocol = self.protocol.lower()
        if protocol not in _PROTOCOLS:
            raise ValueError(
                f"Unsupported protocol {self.protocol!r}; expected http or https"
            )
        if not self.host:
            raise ValueError("host is required")
        object.__setattr__(self, "protocol", protocol)

    @property
    def base_url(self) -> str:
        """``protocol://host[/base_path]`` without a trailing slash."""
        url = f"{self.protocol}://{self.host.strip('/')}"
        path = self.base_path.strip("/")
        return f"{url}/{path}" if path else url
