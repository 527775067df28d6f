"""Tests for urlshort.__init__ — lazy import registry covers all public names."""

import pytest

import urlshort


@pytest.mark.parametrize("name", urlshort.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(urlshort, name)
    assert obj is not None, f"urlshort.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        urlshort.__getattr__("ThisDoesNotExist")
