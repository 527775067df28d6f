"""urlshort exception hierarchy.

Every startup failure is a ``UrlshortError`` so the CLI can report it
and exit with a non-zero status. Nothing here is raised while serving.
"""


class UrlshortError(Exception):
    """Base for all urlshort-specific errors."""


class ConfigurationError(UrlshortError):
    """Raised when an ``AppConfig`` value is invalid."""


class SourceError(UrlshortError):
    """A configured redirect file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read redirect source {path!r}: {reason}")


class ParseError(UrlshortError):
    """Structured redirect data is malformed.

    Raised for syntax errors and for documents that are not a list of
    records. Building a handler from such input is always fatal.
    """

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"{source}: {detail}")


class RecordError(ParseError):
    """A single record is missing ``path`` or ``url``, or has a non-string value."""

    def __init__(self, source: str, index: int, detail: str) -> None:
        self.index = index
        super().__init__(source, f"record {index}: {detail}")


class StoreError(UrlshortError):
    """The key-value store could not be opened, locked, or read."""
