"""Sync and async clients for the completions API."""

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from completion_cli.constants import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT
from completion_cli.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    RateLimitError,
    ServerError,
    ServiceError,
    TransportError,
)
from completion_cli.models import CompletionRequest, CompletionResponse

logger = logging.getLogger(__name__)


def _build_headers(auth_token: str) -> dict[str, str]:
    """Build request headers, rejecting an empty token."""
    if not auth_token:
        raise ConfigurationError("An API token is required")
    return {
        "Authorization": f"Bearer {auth_token}",
        "Content-Type": "application/json",
    }


def _error_detail(response: httpx.Response) -> str:
    """Extract a human readable error message from an error response."""
    try:
        data = response.json()
    except ValueError:
        return response.text

    if isinstance(data, dict):
        # OpenAI style: {"error": {"message": "..."}}
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
        if "detail" in data:
            return str(data["detail"])
    return response.text


def _handle_error(response: httpx.Response) -> None:
    """Raise appropriate exception for error responses."""
    status = response.status_code
    detail = _error_detail(response) or response.reason_phrase

    if status == 401:
        raise AuthenticationError(f"Authentication failed: {detail}")
    elif status == 429:
        retry_after = response.headers.get("Retry-After")
        try:
            retry_seconds = float(retry_after) if retry_after else None
        except ValueError:
            retry_seconds = None
        raise RateLimitError(f"Rate limit exceeded: {detail}", retry_after=retry_seconds)
    elif status >= 500:
        raise ServerError(f"Server error: {detail}", status_code=status)
    else:
        raise ServiceError(f"Request failed ({status}): {detail}", status_code=status)


def _decode_response(response: httpx.Response) -> CompletionResponse:
    """Decode a successful response body into a CompletionResponse."""
    try:
        data = response.json()
    except ValueError as e:
        raise DecodeError(
            f"Response body is not valid JSON: {e}", status_code=response.status_code
        ) from e

    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(data).__name__}",
            status_code=response.status_code,
        )

    try:
        return CompletionResponse.model_validate(data)
    except ValidationError as e:
        raise DecodeError(
            f"Unexpected response shape: {e}", status_code=response.status_code
        ) from e


class _BaseCompletionClient:
    """Shared configuration for the sync and async clients."""

    def __init__(
        self,
        auth_token: str,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            auth_token: Bearer token for the completions API.
            endpoint: Full URL of the completions endpoint.
            timeout: Transport timeout in seconds.
            debug: Log request and response bodies at DEBUG level.

        Raises:
            ConfigurationError: If auth_token is empty.
        """
        self._headers = _build_headers(auth_token)
        self.endpoint = endpoint
        self.timeout = timeout
        self.debug = debug

    def _before_send(self, request: CompletionRequest) -> dict[str, Any]:
        payload = request.to_payload()
        logger.debug(f"Sending completion request to {self.endpoint}")
        if self.debug:
            logger.debug(f"Request: {payload}")
        return payload

    def _after_receive(self, response: httpx.Response, started: float) -> CompletionResponse:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"Got response, status: {response.status_code} ({elapsed_ms:.0f} ms)")

        if not response.is_success:
            _handle_error(response)

        result = _decode_response(response)
        if self.debug:
            logger.debug(f"Response received: {result!r}")
        return result


class CompletionClient(_BaseCompletionClient):
    """Synchronous client for the completions API.

    Example:
        with CompletionClient(auth_token="sk-...") as client:
            response = client.complete(CompletionRequest(prompt="Hello"))
            for choice in response.ordered_choices():
                print(choice.text)
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create httpx client."""
        if self._client is None:
            self._client = httpx.Client(headers=self._headers, timeout=self.timeout)
        return self._client

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "CompletionClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Generate completions for a prompt.

        Args:
            request: Prompt and generation parameters.

        Returns:
            CompletionResponse with whatever fields the server provided.

        Raises:
            TransportError: If the request could not be delivered.
            AuthenticationError: If the token is rejected.
            RateLimitError: If rate limit is exceeded.
            ServerError: If server returns 5xx error.
            ServiceError: For any other non-2xx status.
            DecodeError: If the body is not a valid completion response.
            ConfigurationError: If the endpoint is not a valid URL.
        """
        client = self._get_client()
        payload = self._before_send(request)

        started = time.perf_counter()
        try:
            response = client.post(self.endpoint, json=payload)
        except httpx.DecodingError as e:
            raise DecodeError(f"Response body could not be decoded: {e}") from e
        except httpx.TransportError as e:
            raise TransportError(f"Request to {self.endpoint} failed: {e}") from e
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid endpoint {self.endpoint!r}: {e}") from e

        return self._after_receive(response, started)


class AsyncCompletionClient(_BaseCompletionClient):
    """Asynchronous client for the completions API.

    Example:
        async with AsyncCompletionClient(auth_token="sk-...") as client:
            response = await client.complete(CompletionRequest(prompt="Hello"))
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(headers=self._headers, timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncCompletionClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Generate completions for a prompt asynchronously.

        See CompletionClient.complete for errors raised.
        """
        client = await self._get_client()
        payload = self._before_send(request)

        started = time.perf_counter()
        try:
            response = await client.post(self.endpoint, json=payload)
        except httpx.DecodingError as e:
            raise DecodeError(f"Response body could not be decoded: {e}") from e
        except httpx.TransportError as e:
            raise TransportError(f"Request to {self.endpoint} failed: {e}") from e
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid endpoint {self.endpoint!r}: {e}") from e

        return self._after_receive(response, started)


async def complete(
    request: CompletionRequest,
    endpoint: str,
    auth_token: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    debug: bool = False,
) -> CompletionResponse:
    """Send one completion request over a fresh connection.

    The connection is opened and closed within this call.

    Raises:
        CompletionClientError: Any of its subclasses, see CompletionClient.complete.
    """
    async with AsyncCompletionClient(
        auth_token, endpoint=endpoint, timeout=timeout, debug=debug
    ) as client:
        return await client.complete(request)

