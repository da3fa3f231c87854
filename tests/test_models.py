"""Tests for request, response and health models"""

from datetime import timezone

import pytest
from pydantic import ValidationError

from src.core.errors import InferenceValidationError
from src.models.health import HealthCheckResult, HealthStatus
from src.models.model_class import ModelClass
from src.models.request import InferenceRequest, clamp_temperature
from src.models.response import InferenceResponse, ResponseMetadata, TokenUsage


def test_request_creation():
    """Test request builder defaults and overrides"""
    request = InferenceRequest(
        template="Hello {{name}}!",
        parameters={"name": "Juan"},
        model_class=ModelClass.GENERAL,
    ).with_max_tokens(100).with_temperature(0.5)

    assert request.template == "Hello {{name}}!"
    assert request.model_class == ModelClass.GENERAL
    assert request.max_tokens == 100
    assert request.temperature == 0.5
    assert request.parameters["name"] == "Juan"


def test_request_defaults_from_model_class():
    """Test max tokens and temperature defaults"""
    request = InferenceRequest(template="t", model_class=ModelClass.CODING)
    assert request.max_tokens == 4096
    assert request.temperature == 0.7
    assert request.model_override is None

    assert InferenceRequest(template="t").max_tokens == 2048
    assert InferenceRequest(template="t", model_class="reasoning").max_tokens == 8192


def test_request_builder_chain():
    """Test the full builder chain"""
    request = (
        InferenceRequest(
            template="Hello {{name}}, please help with {{task}}",
            parameters={"name": "Alice", "task": "code review"},
            model_class=ModelClass.CODING,
        )
        .with_model("custom-model")
        .with_max_tokens(500)
        .with_temperature(0.8)
        .with_metadata("context", "test")
    )

    assert request.model_override == "custom-model"
    assert request.max_tokens == 500
    assert request.temperature == 0.8
    assert request.metadata == {"context": "test"}
    assert request.render_template() == "Hello Alice, please help with code review"


def test_builders_return_copies():
    """Test requests are immutable"""
    original = InferenceRequest(template="t")
    changed = original.with_metadata("k", "v").with_temperature(0.1)

    assert original.metadata == {}
    assert original.temperature == 0.7
    assert changed.metadata == {"k": "v"}

    with pytest.raises(ValidationError):
        original.template = "other"


@pytest.mark.parametrize(
    "value, expected",
    [
        (2.0, 1.0), (-0.5, 0.0), (0.0, 0.0), (1.0, 1.0), (0.35, 0.35), (1.0001, 1.0),
        (float("inf"), 1.0), (float("-inf"), 0.0), (float("nan"), 0.7),
    ],
)
def test_temperature_clamp(value, expected):
    """Test temperature is clamped into [0, 1]"""
    assert clamp_temperature(value) == expected
    assert InferenceRequest(template="t").with_temperature(value).temperature == expected
    assert InferenceRequest(template="t", temperature=value).temperature == expected


def test_with_max_tokens_rejects_zero():
    """Test max tokens must be positive"""
    with pytest.raises(InferenceValidationError):
        InferenceRequest(template="t").with_max_tokens(0)


def test_request_from_payload():
    """Test external input parsing"""
    request = InferenceRequest.from_payload({
        "template": "Hi {{who}}",
        "parameters": {"who": "there"},
        "model_class": "fast",
    })
    assert request.model_class == ModelClass.FAST
    assert request.max_tokens == 1024
    assert request.render_template() == "Hi there"


def test_request_from_payload_invalid_model_class():
    """Test unsupported model classes are validation failures"""
    with pytest.raises(InferenceValidationError) as exc_info:
        InferenceRequest.from_payload({"template": "t", "model_class": "poetry"})

    assert exc_info.value.field == "model_class"
    assert exc_info.value.kind.value == "validation"


def test_request_serialization_round_trip():
    """Test requests serialize with stable field names"""
    request = InferenceRequest(
        template="Hello {{name}}!",
        parameters={"name": "Juan"},
        model_class=ModelClass.CREATIVE,
    ).with_metadata("trace", "abc")

    data = request.model_dump(mode="json")
    assert set(data) == {
        "template", "parameters", "model_class", "model_override",
        "max_tokens", "temperature", "metadata",
    }
    assert data["model_class"] == "creative"
    assert InferenceRequest.model_validate(data) == request


def test_token_usage():
    """Test total tokens are derived"""
    usage = TokenUsage(prompt_tokens=50, completion_tokens=100)
    assert usage.prompt_tokens == 50
    assert usage.completion_tokens == 100
    assert usage.total_tokens == 150


def test_token_usage_ignores_supplied_total():
    """Test a supplied total cannot break additivity"""
    usage = TokenUsage.model_validate({"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 99})
    assert usage.total_tokens == 3


def test_response_metadata():
    """Test metadata defaults"""
    metadata = ResponseMetadata(
        model="claude-3-5-sonnet",
        token_usage=TokenUsage(prompt_tokens=25, completion_tokens=50),
        processing_time_ms=750,
    )

    assert metadata.model == "claude-3-5-sonnet"
    assert metadata.token_usage.total_tokens == 75
    assert metadata.processing_time_ms == 750
    assert metadata.metadata == {}
    assert metadata.created_at.tzinfo == timezone.utc
    assert metadata.with_metadata("k", "v").metadata == {"k": "v"}


def test_response_from_string():
    """Test string content is never parsed"""
    response = InferenceResponse.from_string(
        "{\"a\": 1}",
        "gpt-4o",
        TokenUsage(prompt_tokens=10, completion_tokens=20),
        500,
    )

    assert response.content == "{\"a\": 1}"
    assert response.metadata.model == "gpt-4o"
    assert response.metadata.token_usage.total_tokens == 30
    assert response.metadata.processing_time_ms == 500


def test_response_json_fallback():
    """Test JSON content is parsed and invalid JSON falls back to text"""
    usage = TokenUsage(prompt_tokens=5, completion_tokens=15)

    json_response = InferenceResponse.from_text("{\"message\": \"Hello\"}", "gpt-4o", usage, 250)
    assert json_response.content == {"message": "Hello"}

    text_response = InferenceResponse.from_text("Not valid JSON", "gpt-4o", usage, 250)
    assert text_response.content == "Not valid JSON"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("[1, 2, 3]", [1, 2, 3]),
        ("\"quoted\"", "quoted"),
        ("42", 42),
        ("true", True),
        ("null", None),
        ("  {\"a\": [1]}\n", {"a": [1]}),
        ("1.5e300", 1.5e300),
    ],
)
def test_response_parses_any_json_value(raw, expected):
    """Test every JSON value type is accepted"""
    response = InferenceResponse.from_text(raw, "m", TokenUsage(prompt_tokens=0, completion_tokens=0), 0)
    assert response.content == expected


@pytest.mark.parametrize("raw", ["NaN", "{\"a\": Infinity}", "1e400", "{\"a\": -1e400}", "{\"a\": 1", "", "```json\n{}\n```"])
def test_response_keeps_invalid_json_verbatim(raw):
    """Test non-JSON text is wrapped unchanged"""
    response = InferenceResponse.from_text(raw, "m", TokenUsage(prompt_tokens=0, completion_tokens=0), 0)
    assert response.content == raw


def test_response_serialization():
    """Test response serializes with stable field names"""
    response = InferenceResponse.from_text(
        "{\"message\": \"Hello\"}",
        "gpt-4o",
        TokenUsage(prompt_tokens=1, completion_tokens=2),
        3,
    )
    data = response.model_dump(mode="json")

    assert data["content"] == {"message": "Hello"}
    assert set(data["metadata"]) == {
        "model", "token_usage", "processing_time_ms", "created_at", "metadata",
    }
    assert data["metadata"]["token_usage"] == {
        "prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3,
    }
    assert InferenceResponse.model_validate(data) == response


def test_health_status():
    """Test health status helpers"""
    assert HealthStatus.healthy().is_healthy

    unhealthy = HealthStatus.unhealthy("Service down")
    assert not unhealthy.is_healthy
    assert unhealthy.reason == "Service down"


def test_health_check_result():
    """Test health check result metadata"""
    result = HealthCheckResult(status=HealthStatus.healthy()).with_metadata("service", "mock")

    assert result.metadata == {"service": "mock"}
    assert result.timestamp.tzinfo == timezone.utc
    assert result.model_dump(mode="json")["status"] == {"state": "healthy", "reason": None}
