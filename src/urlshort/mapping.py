"""Redirect map builder.

Turns raw records from any source (a literal dict, parsed YAML, parsed
JSON) into one read-only ``path -> url`` mapping. Records look like::

    - path: /some-path
      url: https://www.some-url.com/demo

A record missing either field is rejected rather than mapped to an
empty string: a misconfigured redirect table must not serve wrong
content.
"""

import json
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, TypeAlias

import yaml

from urlshort.errors import ParseError, RecordError

RedirectMap: TypeAlias = Mapping[str, str]

_FIELDS = ("path", "url")

# Anything here would corrupt the Location header
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")


def build_redirect_map(records: Iterable[Any], *, source: str = "records") -> RedirectMap:
    """Build a frozen mapping from ``path``/``url`` records.

    Later records win over earlier ones with the same path.

    Raises:
        RecordError: A record is not a mapping, lacks a field, or holds
            a non-string value or a control character. Nothing is
            returned in that case.
    """
    redirects: dict[str, str] = {}
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise RecordError(source, index, f"expected a mapping, got {type(record).__name__}")
        missing = [name for name in _FIELDS if name not in record]
        if missing:
            raise RecordError(source, index, f"missing field(s): {', '.join(missing)}")
        path, url = record["path"], record["url"]
        if not isinstance(path, str) or not isinstance(url, str):
            raise RecordError(source, index, "'path' and 'url' must both be strings")
        if has_control_characters(path) or has_control_characters(url):
            raise RecordError(source, index, "'path' and 'url' must not contain control characters")
        redirects[path] = url
    return MappingProxyType(redirects)


def has_control_characters(value: str) -> bool:
    """True if *value* holds an ASCII control character (CR, LF, NUL, ...)."""
    return _CONTROL_CHARACTERS.search(value) is not None


def freeze_map(paths_to_urls: Mapping[str, str]) -> RedirectMap:
    """Copy a literal ``path -> url`` dict into a read-only mapping."""
    return MappingProxyType(dict(paths_to_urls))


def parse_yaml(data: bytes | str, *, source: str = "yaml") -> RedirectMap:
    """Parse a YAML list of records into a redirect map."""
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ParseError(source, f"invalid YAML: {exc}") from exc
    return build_redirect_map(_as_records(document, source), source=source)


def parse_json(data: bytes | str, *, source: str = "json") -> RedirectMap:
    """Parse a JSON array of records into a redirect map."""
    try:
        document = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(source, f"invalid JSON: {exc}") from exc
    return build_redirect_map(_as_records(document, source), source=source)


def _as_records(document: Any, source: str) -> list[Any]:
    # An empty YAML document loads as None
    if document is None:
        return []
    if not isinstance(document, list):
        raise ParseError(source, f"expected a list of records, got {type(document).__name__}")
    return document
