#!/usr/bin/env python3
"""Basic completion example using the completion_cli library."""

import asyncio

from completion_cli import CompletionRequest, complete
from completion_cli.config import get_settings


async def main() -> None:
    """Demonstrate a single completion without the interactive prompt."""
    settings = get_settings()

    response = await complete(
        CompletionRequest(prompt="Write a haiku about HTTP", max_tokens=40, n=2),
        settings.completion_endpoint,
        settings.require_token(),
    )

    print(f"Model: {response.model or 'unknown'}")
    for choice in response.ordered_choices():
        print(f"#{choice.index + 1}: {choice.text.strip()} ({choice.finish_reason})")


if __name__ == "__main__":
    asyncio.run(main())
