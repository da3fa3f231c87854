"""
Mock Inference Service - Deterministic in-process backend

Used for tests and for developing against the InferenceService interface
without a live provider. Generation returns a canned JSON object shaped by the
request's model class, embedding the rendered prompt so parameter substitution
can be asserted end to end.
"""

import asyncio
import json
import os
import time
from typing import Any, Callable, Dict, List, Optional

from src.models.health import HealthCheckResult, HealthStatus
from src.models.model_class import ModelClass, ProviderFamily
from src.models.request import InferenceRequest
from src.models.response import InferenceResponse, TokenUsage
from src.observability.logger import get_logger
from src.prompts.tokens import estimate_tokens
from src.services.base import InferenceService, resolve_model

logger = get_logger(__name__)


def _coding_payload(prompt: str) -> Dict[str, Any]:
    return {
        "code": f"# Generated code for: {prompt}\ndef main():\n    print(\"Hello from mock!\")\n",
        "language": "python",
        "explanation": "This is a basic Python program generated from the template.",
    }


def _reasoning_payload(prompt: str) -> Dict[str, Any]:
    return {
        "analysis": f"After careful analysis of '{prompt}'...",
        "reasoning_steps": [
            "First, I analyzed the template and parameters",
            "Then, I considered the context and implications",
            "Finally, I formulated this structured response",
        ],
        "conclusion": "This is a mock reasoning response with detailed analysis.",
    }


def _general_payload(prompt: str) -> Dict[str, Any]:
    return {"message": f"Mock completion for: {prompt}"}


def _fast_payload(prompt: str) -> Dict[str, Any]:
    return {"response": f"Quick response: {prompt}"}


def _creative_payload(prompt: str) -> Dict[str, Any]:
    return {
        "story": f"Once upon a time, when prompted with '{prompt}', there was a magical response...",
        "genre": "fantasy",
        "mood": "whimsical",
    }


CANNED_PAYLOADS: Dict[ModelClass, Callable[[str], Dict[str, Any]]] = {
    ModelClass.CODING: _coding_payload,
    ModelClass.REASONING: _reasoning_payload,
    ModelClass.GENERAL: _general_payload,
    ModelClass.FAST: _fast_payload,
    ModelClass.CREATIVE: _creative_payload,
}


class MockInferenceService(InferenceService):
    """
    Mock inference service for testing

    Configuration:
    - latency_ms: simulated latency per call (default from MOCK_LATENCY_MS, 100)
    - health_check_fails: report Unhealthy from health_check
    - custom_response: raw text returned instead of the canned payload
    - provider: policy column used to resolve model ids
    """

    def __init__(
        self,
        latency_ms: Optional[int] = None,
        health_check_fails: bool = False,
        custom_response: Optional[str] = None,
        provider: ProviderFamily = ProviderFamily.OPENAI,
    ):
        if latency_ms is None:
            latency_ms = int(os.getenv("MOCK_LATENCY_MS", "100"))
        self.latency_ms = max(latency_ms, 0)
        self.health_check_fails = health_check_fails
        self.custom_response = custom_response
        self.provider = provider

    def _replace(self, **changes: Any) -> "MockInferenceService":
        config = {
            "latency_ms": self.latency_ms,
            "health_check_fails": self.health_check_fails,
            "custom_response": self.custom_response,
            "provider": self.provider,
        }
        config.update(changes)
        return MockInferenceService(**config)

    def with_latency(self, latency_ms: int) -> "MockInferenceService":
        return self._replace(latency_ms=latency_ms)

    def with_health_failure(self) -> "MockInferenceService":
        return self._replace(health_check_fails=True)

    def with_custom_response(self, response: str) -> "MockInferenceService":
        return self._replace(custom_response=response)

    def generate_mock_response(self, request: InferenceRequest, prompt: Optional[str] = None) -> str:
        """Raw text the mock 'model' produces for a request"""
        if self.custom_response is not None:
            return self.custom_response

        if prompt is None:
            prompt = request.render_template()
        payload = CANNED_PAYLOADS[request.model_class](prompt)
        return json.dumps(payload, indent=4)

    async def infer(self, request: InferenceRequest) -> InferenceResponse:
        start_time = time.monotonic()

        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

        rendered = request.render_template()
        generated = self.generate_mock_response(request, rendered)
        model = resolve_model(request, self.provider)
        usage = TokenUsage(
            prompt_tokens=estimate_tokens(rendered),
            completion_tokens=estimate_tokens(generated),
        )
        processing_time_ms = round((time.monotonic() - start_time) * 1000)

        logger.debug(
            "mock inference model=%s class=%s tokens=%d time_ms=%d",
            model,
            request.model_class.value,
            usage.total_tokens,
            processing_time_ms,
        )

        return InferenceResponse.from_text(generated, model, usage, processing_time_ms)

    async def health_check(self) -> HealthCheckResult:
        if self.health_check_fails:
            return HealthCheckResult(
                status=HealthStatus.unhealthy("Mock service intentionally failing"),
            )

        return (
            HealthCheckResult(status=HealthStatus.healthy())
            .with_metadata("service", "mock")
            .with_metadata("latency_ms", self.latency_ms)
        )

    def supported_models(self) -> List[str]:
        return [f"mock-{model_class.value}" for model_class in ModelClass]

    def count_tokens(self, text: str) -> int:
        return estimate_tokens(text)
