"""Pydantic models for the completions API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from completion_cli.constants import DEFAULT_MAX_TOKENS, DEFAULT_N, DEFAULT_TEMPERATURE


class CompletionRequest(BaseModel):
    """Request body for the completions endpoint.

    Field names match the remote API schema, so the model serializes
    directly into the request payload.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(default="", description="Prompt to complete")
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=0)
    n: int = Field(default=DEFAULT_N, ge=1, le=128, description="How many completions to generate")
    stop: str | None = Field(default=None, description="Stop sequence")

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON payload, omitting an unset stop sequence."""
        return self.model_dump(exclude_none=True)


class CompletionChoice(BaseModel):
    """A single generated completion."""

    text: str = Field(..., description="Generated text")
    index: int = Field(..., ge=0, description="Position of this choice")
    finish_reason: str | None = Field(
        default=None, description="Why generation stopped (stop, length, ...)"
    )


class CompletionResponse(BaseModel):
    """Response from the completions endpoint.

    Every field is optional; display code supplies its own fallbacks.
    """

    id: str | None = Field(default=None, description="Completion ID")
    model: str | None = Field(default=None, description="Model that served the request")
    choices: list[CompletionChoice] | None = Field(default=None)

    def ordered_choices(self) -> list[CompletionChoice]:
        """Choices sorted by index, empty when the server sent none."""
        if not self.choices:
            return []
        return sorted(self.choices, key=lambda choice: choice.index)
