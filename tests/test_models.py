"""Tests for request and response models."""

import pytest
from pydantic import ValidationError

from completion_cli import CompletionChoice, CompletionRequest, CompletionResponse


class TestCompletionRequest:
    """Tests for CompletionRequest."""

    def test_defaults(self) -> None:
        """Test CLI defaults are the model defaults."""
        request = CompletionRequest()
        assert request.prompt == ""
        assert request.temperature == 0.3
        assert request.max_tokens == 50
        assert request.n == 1
        assert request.stop is None

    def test_payload_omits_unset_stop(self) -> None:
        """Test a None stop is left out of the payload."""
        payload = CompletionRequest(prompt="Hi").to_payload()
        assert "stop" not in payload
        assert payload == {"prompt": "Hi", "temperature": 0.3, "max_tokens": 50, "n": 1}

    def test_payload_keeps_empty_stop(self) -> None:
        """Test an explicit empty stop string is sent as-is."""
        assert CompletionRequest(stop="").to_payload()["stop"] == ""

    def test_frozen(self) -> None:
        """Test requests cannot be modified once built."""
        request = CompletionRequest(prompt="Hi")
        with pytest.raises(ValidationError):
            request.prompt = "Bye"

    def test_prompt_override_keeps_parameters(self) -> None:
        """Test copying with a new prompt keeps the generation parameters."""
        template = CompletionRequest(temperature=0.9, max_tokens=10, n=2, stop="\n")
        request = template.model_copy(update={"prompt": "Hello"})
        assert request.prompt == "Hello"
        assert request.temperature == 0.9
        assert request.n == 2
        assert template.prompt == ""

    def test_zero_max_tokens_allowed(self) -> None:
        """Test max_tokens accepts any unsigned value, leaving validity to the server."""
        assert CompletionRequest(max_tokens=0).to_payload()["max_tokens"] == 0

    @pytest.mark.parametrize(
        "field,value",
        [("temperature", -0.1), ("temperature", 2.5), ("max_tokens", -1), ("n", 0)],
    )
    def test_out_of_range_rejected(self, field: str, value: float) -> None:
        """Test invalid generation parameters are rejected."""
        with pytest.raises(ValidationError):
            CompletionRequest(**{field: value})


class TestCompletionResponse:
    """Tests for CompletionResponse."""

    def test_all_fields_optional(self) -> None:
        """Test an empty object is a valid response."""
        response = CompletionResponse.model_validate({})
        assert response.id is None
        assert response.model is None
        assert response.choices is None

    def test_extra_fields_ignored(self) -> None:
        """Test unknown server fields do not break decoding."""
        response = CompletionResponse.model_validate(
            {"id": "cmpl-1", "object": "text_completion", "usage": {"total_tokens": 3}}
        )
        assert response.id == "cmpl-1"

    def test_ordered_choices(self) -> None:
        """Test choices are ordered by index."""
        response = CompletionResponse(
            choices=[
                CompletionChoice(text="b", index=1, finish_reason="length"),
                CompletionChoice(text="a", index=0, finish_reason="stop"),
            ]
        )
        assert [c.text for c in response.ordered_choices()] == ["a", "b"]

    def test_null_finish_reason(self) -> None:
        """Test a null finish reason is accepted."""
        choice = CompletionChoice.model_validate({"text": "x", "index": 0, "finish_reason": None})
        assert choice.finish_reason is None

    def test_choice_requires_text(self) -> None:
        """Test a choice without text is rejected."""
        with pytest.raises(ValidationError):
            CompletionChoice.model_validate({"index": 0})
