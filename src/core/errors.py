"""
Inference error hierarchy

Every failure raised by an inference service is an InferenceError carrying a
machine-checkable kind, so callers can branch (shrink the request, back off,
fix configuration) instead of parsing log text.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    """Error categories"""
    VALIDATION = "validation"
    NETWORK = "network"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class InferenceError(Exception):
    """Base error for inference operations"""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for logging or transport"""
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "type": type(self).__name__,
            "message": self.message,
        }
        if self.field:
            data["field"] = self.field
        return data


class GenerationError(InferenceError):
    """Backend could not produce output"""
    kind = ErrorKind.INTERNAL


class InferenceValidationError(InferenceError):
    """Caller-supplied value violates a documented constraint"""
    kind = ErrorKind.VALIDATION


class NetworkError(InferenceError):
    """Transport failure talking to a provider"""
    kind = ErrorKind.NETWORK


class ConfigurationError(InferenceError):
    """Backend is misconfigured"""
    kind = ErrorKind.CONFIGURATION


class RateLimitExceededError(NetworkError):
    """Provider rejected the call because of rate limiting"""


class TokenLimitExceededError(InferenceValidationError):
    """Requested token budget is above a known limit"""

    def __init__(self, message: str, limit: int, requested: int):
        super().__init__(message, field="token_limit")
        self.limit = limit
        self.requested = requested


class ContextWindowExceededError(InferenceValidationError):
    """Prompt plus completion budget does not fit the model context"""

    def __init__(self, message: str, max_tokens: int, actual_tokens: int):
        super().__init__(message, field="context_window")
        self.max_tokens = max_tokens
        self.actual_tokens = actual_tokens


def generation_failed(message: str) -> GenerationError:
    return GenerationError(f"Inference generation failed: {message}")


def invalid_model_type(model_type: str) -> InferenceValidationError:
    return InferenceValidationError(
        f"Invalid model type: {model_type}",
        field="model_class",
    )


def token_limit_exceeded(limit: int, requested: int) -> TokenLimitExceededError:
    return TokenLimitExceededError(
        f"Token limit {limit} exceeded, requested {requested}",
        limit=limit,
        requested=requested,
    )


def rate_limit_exceeded(provider: str) -> RateLimitExceededError:
    return RateLimitExceededError(f"{provider} rate limit exceeded")


def invalid_api_key(provider: str) -> ConfigurationError:
    return ConfigurationError(f"Invalid API key for {provider}")


def context_window_exceeded(max_tokens: int, actual_tokens: int) -> ContextWindowExceededError:
    return ContextWindowExceededError(
        f"Context window {max_tokens} exceeded with {actual_tokens} tokens",
        max_tokens=max_tokens,
        actual_tokens=actual_tokens,
    )


def unsupported_model(model: str) -> InferenceValidationError:
    return InferenceValidationError(f"Unsupported model: {model}", field="model")


def template_processing_failed(message: str) -> InferenceValidationError:
    return InferenceValidationError(
        f"Template processing failed: {message}",
        field="template",
    )
