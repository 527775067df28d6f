"""``urlshort routes``: print the effective redirect table.

Lists every redirect in priority order with the source it comes from.
Entries hidden by a higher-priority source are marked ``(shadowed)``.
"""

import argparse

from urlshort.chain import describe_chain
from urlshort.cli._load import load_chain


def run_routes(args: argparse.Namespace) -> None:
    _config, handler = load_chain(args)
    entries = describe_chain(handler)
    if not entries:
        print("No redirects configured.")
        return

    rows = [
        (entry.source, entry.path, entry.url + (" (shadowed)" if entry.shadowed else ""))
        for entry in entries
    ]

    # Column widths
    max_source = max(max(len(r[0]) for r in rows), 6)  # "SOURCE" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_source}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("SOURCE", "PATH", "URL"))
    sep_len = max_source + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for source, path, url in rows:
        print(fmt.format(source, path, url))
