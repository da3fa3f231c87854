"""
Inference service configuration

Environment-based backend selection. Defaults to the in-process mock so
nothing reaches a provider unless explicitly configured.
"""

import os
from dataclasses import dataclass
from typing import Literal, Optional

from src.core.errors import ConfigurationError
from src.router.policy import resolve_provider
from src.services.base import InferenceService
from src.services.litellm_service import LiteLLMInferenceService
from src.services.mock import MockInferenceService


InferenceBackendType = Literal["mock", "litellm"]


@dataclass
class InferenceConfig:
    """Inference configuration from environment"""
    backend: InferenceBackendType
    provider: str
    timeout_seconds: float
    max_retries: int
    mock_latency_ms: int

    @classmethod
    def from_env(cls) -> "InferenceConfig":
        return cls(
            backend=os.getenv("INFERENCE_BACKEND", "mock").strip().lower(),  # type: ignore
            provider=os.getenv("INFERENCE_PROVIDER", "openai"),
            timeout_seconds=float(os.getenv("INFERENCE_TIMEOUT_SECONDS", "30")),
            max_retries=int(os.getenv("INFERENCE_MAX_RETRIES", "0")),
            mock_latency_ms=int(os.getenv("MOCK_LATENCY_MS", "100")),
        )


def create_inference_service(config: Optional[InferenceConfig] = None) -> InferenceService:
    """Create inference service instance based on configuration"""
    config = config or InferenceConfig.from_env()

    if config.backend == "mock":
        return MockInferenceService(
            latency_ms=config.mock_latency_ms,
            provider=resolve_provider(config.provider),
        )
    if config.backend == "litellm":
        return LiteLLMInferenceService(
            provider=config.provider,
            timeout_seconds=config.timeout_seconds,
            max_retries=config.max_retries,
        )
    raise ConfigurationError(f"Unknown inference backend: {config.backend}")
