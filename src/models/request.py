"""Template-based inference request model"""

import math
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from src.core.errors import InferenceValidationError
from src.models.model_class import ModelClass
from src.prompts.renderer import render
from src.router.policy import default_max_tokens

DEFAULT_TEMPERATURE = 0.7


def clamp_temperature(temperature: float) -> float:
    """Clamp temperature into [0.0, 1.0]; NaN falls back to the default"""
    temperature = float(temperature)
    if math.isnan(temperature):
        return DEFAULT_TEMPERATURE
    return min(max(temperature, 0.0), 1.0)


class InferenceRequest(BaseModel):
    """
    Template-based inference request

    Immutable once built. ``max_tokens`` defaults to the model class budget and
    ``temperature`` to 0.7; the ``with_*`` helpers return modified copies.
    """
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    template: str = Field(..., description='Template with placeholders like "Hello {{name}}!"')
    parameters: Dict[str, str] = Field(default_factory=dict)
    model_class: ModelClass = ModelClass.GENERAL
    model_override: Optional[str] = None
    max_tokens: Optional[int] = Field(None, ge=1)
    temperature: Optional[float] = DEFAULT_TEMPERATURE
    metadata: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _default_max_tokens(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("max_tokens") is not None:
            return data
        try:
            model_class = ModelClass.parse(data.get("model_class", ModelClass.GENERAL))
        except InferenceValidationError:
            # Field validation reports the bad class
            return data
        return {**data, "max_tokens": default_max_tokens(model_class)}

    @field_validator("model_class", mode="before")
    @classmethod
    def _parse_model_class(cls, value: Any) -> ModelClass:
        try:
            return ModelClass.parse(value)
        except InferenceValidationError as e:
            raise ValueError(e.message) from None

    @field_validator("temperature")
    @classmethod
    def _clamp_temperature(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        return clamp_temperature(value)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "InferenceRequest":
        """Build a request from external input"""
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or None
            raise InferenceValidationError(
                f"Invalid inference request: {error['msg']}",
                field=field,
            ) from e

    def with_model(self, model: str) -> "InferenceRequest":
        return self.model_copy(update={"model_override": model})

    def with_max_tokens(self, max_tokens: int) -> "InferenceRequest":
        if max_tokens < 1:
            raise InferenceValidationError(
                f"max_tokens must be positive, got {max_tokens}",
                field="max_tokens",
            )
        return self.model_copy(update={"max_tokens": max_tokens})

    def with_temperature(self, temperature: float) -> "InferenceRequest":
        return self.model_copy(update={"temperature": clamp_temperature(temperature)})

    def with_metadata(self, key: str, value: str) -> "InferenceRequest":
        return self.model_copy(update={"metadata": {**self.metadata, key: value}})

    def render_template(self) -> str:
        """Render the final prompt"""
        return render(self.template, self.parameters)
