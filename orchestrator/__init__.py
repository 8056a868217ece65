from .cache_writer import write_cache_entry
from .core import QueryOrchestrator, build_request
from .input_resolver import resolve_query
from .response_formatter import format_response

__all__ = [
    "QueryOrchestrator",
    "build_request",
    "format_response",
    "resolve_query",
    "write_cache_entry",
]
