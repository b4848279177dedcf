# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Turns URL query strings into argument vectors.

`key=value` pairs become `-key value`; a bare `key` becomes the boolean flag
`-key`. Keys and values are percent-decoded, with `+` read as a space.
"""
from urllib.parse import unquote_plus, urlsplit


def query_to_args(query: str) -> list[str]:
    """
    Convert a query string to an argument list.

    Example:
        >>> query_to_args("path=/tmp/a%20b.txt&a=2&verbose")
        ['-path', '/tmp/a b.txt', '-a', '2', '-verbose']
    """
    args: list[str] = []
    for segment in query.split("&"):
        if not segment:
            continue
        key, separator, value = segment.partition("=")
        if separator and key:
            args.append(f"-{unquote_plus(key)}")
            args.append(unquote_plus(value))
        else:
            args.append(f"-{unquote_plus(segment)}")
    return args


def url_to_args(url: str) -> list[str]:
    """Convert the query part of a URL to an argument list."""
    return query_to_args(urlsplit(url).query)
