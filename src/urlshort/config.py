"""Application configuration.

AppConfig is a frozen dataclass: built once at startup from CLI flags,
never reloaded while the server runs.
"""

from dataclasses import dataclass

from urlshort.errors import ConfigurationError

# Body served by the terminal router for unmatched paths
GREETING = "Hello, world!\n"

_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Service configuration. Immutable after creation.

    Unset source paths are skipped when the chain is assembled::

        config = AppConfig(yaml_file="urlmappings.yaml", port=3000)
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"

    # Redirect sources
    yaml_file: str | None = None
    json_file: str | None = None
    store_file: str | None = "bolt.db"

    # Key-value store
    store_bucket: str = "URLRedirects"
    store_timeout: float = 10.0  # Seconds to wait for another process's lock

    # Terminal response
    greeting: str = GREETING

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            msg = f"port must be between 0 and 65535, got {self.port}"
            raise ConfigurationError(msg)
        if self.store_timeout <= 0:
            msg = f"store_timeout must be positive, got {self.store_timeout}"
            raise ConfigurationError(msg)
        if not self.store_bucket.isidentifier():
            msg = f"store_bucket must be a plain identifier, got {self.store_bucket!r}"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in _LOG_LEVELS:
            msg = f"unknown log level {self.log_level!r}"
            raise ConfigurationError(msg)
