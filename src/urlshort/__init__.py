"""urlshort: a URL-redirect service with layered lookup sources.

Request paths are looked up in a chain of sources, highest priority
first: a static map, a key-value store, a YAML file, then a JSON file.
Unmatched paths fall through to a greeting.

Basic usage::

    import anyio
    from urlshort import App, AppConfig, build_chain

    config = AppConfig(yaml_file="urlmappings.yaml")
    handler = anyio.run(build_chain, config, {"/docs": "https://example.com/docs"})
    app = App(handler, config=config)
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "DefaultRouter",
    "LookupHandler",
    "ParseError",
    "RecordError",
    "Redirect",
    "RedirectStore",
    "Request",
    "Response",
    "SourceError",
    "StoreError",
    "UrlshortError",
    "build_chain",
    "build_redirect_map",
    "json_handler",
    "map_handler",
    "store_handler",
    "yaml_handler",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import urlshort`` fast while providing a clean top-level API.
    """
    if name == "App":
        from urlshort.app import App

        return App

    if name == "AppConfig":
        from urlshort.config import AppConfig

        return AppConfig

    if name == "Request":
        from urlshort.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from urlshort.http import response as _resp

        return getattr(_resp, name)

    if name in (
        "DefaultRouter",
        "LookupHandler",
        "json_handler",
        "map_handler",
        "store_handler",
        "yaml_handler",
    ):
        from urlshort import handlers as _handlers

        return getattr(_handlers, name)

    if name == "build_chain":
        from urlshort.chain import build_chain

        return build_chain

    if name == "build_redirect_map":
        from urlshort.mapping import build_redirect_map

        return build_redirect_map

    if name == "RedirectStore":
        from urlshort.store import RedirectStore

        return RedirectStore

    if name in (
        "ConfigurationError",
        "ParseError",
        "RecordError",
        "SourceError",
        "StoreError",
        "UrlshortError",
    ):
        from urlshort import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
