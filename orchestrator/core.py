"""
QueryOrchestrator - sequences one kagi CLI invocation.

Key guarantees:
- The formatted answer is printed before any cache write is attempted
- Cache-write failures are logged and never change the outcome
- Remote-call failures propagate as RemoteCallError
"""

from typing import TextIO

from api.base_client import BaseAnswerClient
from models.errors import CacheWriteError
from models.fastgpt import FastGPTRequest
from orchestrator.cache_writer import write_cache_entry
from orchestrator.response_formatter import format_response
from utils.logger import get_logger

logger = get_logger(__name__)


def build_request(query: str) -> FastGPTRequest:
    """Build the request sent for *query*: web search and server-side caching on."""
    return FastGPTRequest(query=query, web_search=True, cache=True)


class QueryOrchestrator:
    def __init__(
        self,
        client: BaseAnswerClient,
        stdout: TextIO,
        cache_dir: str = "",
        verbose: bool = False,
    ):
        self.client = client
        self.stdout = stdout
        self.cache_dir = cache_dir
        self.verbose = verbose

    def ask(self, query: str) -> str:
        """
        Query the API, print the formatted answer and cache it if configured.

        Args:
            query: Resolved, non-empty query

        Returns:
            The formatted answer that was printed

        Raises:
            RemoteCallError: If the API call fails
        """
        request = build_request(query)
        if self.verbose:
            logger.info(f"Request: {request}")

        response = self.client.query(request)

        if self.verbose:
            logger.info(
                f"Response: {len(response.references)} references, {response.tokens} tokens",
                extra={"extra_fields": {"meta": response.meta}},
            )
            balance = response.meta.get("api_balance")
            if balance is not None:
                logger.info(f"API balance: {balance}")

        answer = format_response(response, query)
        self.stdout.write(answer)
        self.stdout.flush()

        if self.cache_dir:
            self._write_cache(query, answer)
        return answer

    def _write_cache(self, query: str, answer: str) -> None:
        try:
            path = write_cache_entry(self.cache_dir, query, answer)
        except CacheWriteError as e:
            logger.warning(
                f"Cache write failed: {e}",
                extra={"extra_fields": {"cache_dir": self.cache_dir}},
            )
            return
        if self.verbose:
            logger.info(f"Cached answer to {path}")
