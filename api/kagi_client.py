from collections.abc import Callable
from typing import Any

import httpx

from config.config import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from models.errors import MissingCredentialError, RemoteCallError
from models.fastgpt import FastGPTRequest, FastGPTResponse, Reference
from utils.logger import get_logger

from .base_client import BaseAnswerClient

logger = get_logger(__name__)


class KagiFastGPTClient(BaseAnswerClient):
    """
    HTTPX-backed client for the Kagi FastGPT API.

    Errors of any kind (transport, HTTP status, malformed body, API error
    envelope) are raised as RemoteCallError.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client_factory: Callable[[], httpx.Client] | None = None,
        **kwargs,
    ):
        """
        Initialize the FastGPT client.

        Args:
            api_key: Kagi API key
            base_url: API base URL (the /fastgpt path is appended)
            timeout: Request timeout in seconds
            client_factory: Optional factory returning a preconfigured httpx.Client
        """
        if not api_key or not api_key.strip():
            raise MissingCredentialError("missing Kagi API key")
        super().__init__(api_key.strip(), **kwargs)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client_factory = client_factory

    def query(self, request: FastGPTRequest) -> FastGPTResponse:
        headers = {
            "Authorization": f"Bot {self.api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}/fastgpt"

        if self.client_factory is None:
            client = httpx.Client(timeout=self.timeout)
        else:
            client = self.client_factory()

        try:
            with client:
                response = client.post(url, json=request.to_payload(), headers=headers)
        except httpx.HTTPError as exc:
            raise RemoteCallError(f"FastGPT request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            detail = _error_detail(payload) or response.reason_phrase
            raise RemoteCallError(
                f"FastGPT returned HTTP {response.status_code}: {detail}",
                status_code=response.status_code,
            )
        if not isinstance(payload, dict):
            raise RemoteCallError("FastGPT returned a non-JSON response body")

        detail = _error_detail(payload)
        if detail:
            raise RemoteCallError(f"FastGPT returned an error: {detail}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise RemoteCallError("FastGPT response is missing the data object")

        parsed = parse_response(data, payload.get("meta"))
        logger.debug(
            "FastGPT query completed",
            extra={
                "extra_fields": {
                    "references": len(parsed.references),
                    "tokens": parsed.tokens,
                    "request_id": parsed.meta.get("id"),
                }
            },
        )
        return parsed


def parse_response(data: dict[str, Any], meta: Any = None) -> FastGPTResponse:
    """
    Map the API's data object into a FastGPTResponse.

    The API names the reference link "url"; it becomes Reference.link.
    """
    references = [
        Reference(
            title=item.get("title") or "",
            link=item.get("url") or "",
            snippet=item.get("snippet") or "",
        )
        for item in data.get("references") or []
        if isinstance(item, dict)
    ]
    return FastGPTResponse(
        output=data.get("output") or "",
        references=references,
        tokens=int(data.get("tokens") or 0),
        meta=meta if isinstance(meta, dict) else {},
    )


def _error_detail(payload: Any) -> str:
    if not isinstance(payload, dict):
        return ""
    errors = payload.get("error")
    if not errors:
        return ""
    if isinstance(errors, dict):
        errors = [errors]
    if not isinstance(errors, list):
        return str(errors)
    messages = []
    for item in errors:
        if isinstance(item, dict):
            code = item.get("code")
            msg = item.get("msg") or item.get("message") or ""
            messages.append(f"{msg} (code {code})" if code is not None else msg)
        else:
            messages.append(str(item))
    return "; ".join(m for m in messages if m)
