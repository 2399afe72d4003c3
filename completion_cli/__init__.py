"""Completion CLI.

One-shot client for a text-completion API, usable as a library or from
the command line.

Example usage:

    # Async, one request over a fresh connection
    from completion_cli import CompletionRequest, complete

    response = await complete(
        CompletionRequest(prompt="Hello", max_tokens=50),
        endpoint="https://api.openai.com/v1/engines/text-davinci-002/completions",
        auth_token="sk-...",
    )
    for choice in response.ordered_choices():
        print(choice.text)

    # Sync client
    from completion_cli import CompletionClient

    with CompletionClient(auth_token="sk-...") as client:
        response = client.complete(CompletionRequest(prompt="Hello"))
"""

from completion_cli.client import AsyncCompletionClient, CompletionClient, complete
from completion_cli.exceptions import (
    AuthenticationError,
    CompletionClientError,
    ConfigurationError,
    DecodeError,
    RateLimitError,
    ServerError,
    ServiceError,
    TransportError,
)
from completion_cli.models import CompletionChoice, CompletionRequest, CompletionResponse

__version__ = "0.1.0"
__all__ = [
    # Clients
    "AsyncCompletionClient",
    "CompletionClient",
    "complete",
    # Models
    "CompletionChoice",
    "CompletionRequest",
    "CompletionResponse",
    # Exceptions
    "AuthenticationError",
    "CompletionClientError",
    "ConfigurationError",
    "DecodeError",
    "RateLimitError",
    "ServerError",
    "ServiceError",
    "TransportError",
]
