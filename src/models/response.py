"""Inference response models"""

import json
import math
from datetime import datetime, timezone
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict, Field, model_validator


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def normalize_content(raw: str) -> Any:
    """
    Parse raw generated text as JSON, falling back to the text itself

    Any parse failure yields the raw string unchanged. Numbers outside the
    float range are parse failures.
    """
    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError):
        return raw


class TokenUsage(BaseModel):
    """Token usage information"""
    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = Field(..., ge=0)
    completion_tokens: int = Field(..., ge=0)
    total_tokens: int = Field(0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _derive_total(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            data["total_tokens"] = int(data.get("prompt_tokens") or 0) + int(data.get("completion_tokens") or 0)
        return data


class ResponseMetadata(BaseModel):
    """Processing information attached to a response"""
    model_config = ConfigDict(frozen=True)

    model: str
    token_usage: TokenUsage
    processing_time_ms: int = Field(..., ge=0)
    created_at: datetime = Field(default_factory=_utc_now)
    metadata: Dict[str, str] = Field(default_factory=dict)

    def with_metadata(self, key: str, value: str) -> "ResponseMetadata":
        return self.model_copy(update={"metadata": {**self.metadata, key: value}})


class InferenceResponse(BaseModel):
    """Generated JSON content plus metadata"""
    model_config = ConfigDict(frozen=True)

    content: Any = None
    metadata: ResponseMetadata

    @classmethod
    def from_string(
        cls,
        content: str,
        model: str,
        token_usage: TokenUsage,
        processing_time_ms: int,
    ) -> "InferenceResponse":
        """Response whose content is always a JSON string"""
        return cls(
            content=content,
            metadata=ResponseMetadata(
                model=model,
                token_usage=token_usage,
                processing_time_ms=processing_time_ms,
            ),
        )

    @classmethod
    def from_text(
        cls,
        content: str,
        model: str,
        token_usage: TokenUsage,
        processing_time_ms: int,
    ) -> "InferenceResponse":
        """Response whose content is parsed as JSON when possible"""
        return cls(
            content=normalize_content(content),
            metadata=ResponseMetadata(
                model=model,
                token_usage=token_usage,
                processing_time_ms=processing_time_ms,
            ),
        )
