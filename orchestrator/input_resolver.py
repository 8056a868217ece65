"""Resolve the query text from positional arguments or standard input."""

from collections.abc import Sequence
from typing import TextIO

from models.errors import UsageError

STDIN_PROMPT = "Enter your query (Ctrl+D when done):\n"
USAGE_MESSAGE = "usage: kagi [flags] query"


def resolve_query(args: Sequence[str], stdin: TextIO, stderr: TextIO) -> str:
    """
    Determine the query for this invocation.

    Positional arguments win and are joined with single spaces. Without them,
    stdin is read to EOF and trimmed; an interactive terminal gets a prompt on
    stderr first.

    Raises:
        UsageError: If the resolved query is empty or stdin cannot be read
    """
    if args:
        query = " ".join(args)
    else:
        if _is_interactive(stdin):
            stderr.write(STDIN_PROMPT)
            stderr.flush()
        try:
            query = stdin.read().strip()
        except (OSError, UnicodeDecodeError) as exc:
            raise UsageError(f"failed to read from stdin: {exc}") from exc

    query = _replace_undecodable(query)
    if not query.strip():
        raise UsageError(USAGE_MESSAGE)
    return query


def _replace_undecodable(text: str) -> str:
    # Undecodable argv bytes arrive as lone surrogates; swap them for U+FFFD
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "surrogatepass")
    return raw.decode("utf-8", "replace")


def _is_interactive(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False
