"""
LiteLLM Inference Service - Provider-backed implementation

Dispatches rendered templates to OpenAI or Anthropic models through LiteLLM.
Model ids come from the model class policy column of the configured provider
family unless the request overrides them. Provider exceptions are translated
into the inference error taxonomy.
"""

import asyncio
import os
import time
from typing import Any, Dict, List, Optional, Union

import litellm

from src.core.errors import (
    ContextWindowExceededError,
    InferenceError,
    NetworkError,
    context_window_exceeded,
    generation_failed,
    invalid_api_key,
    rate_limit_exceeded,
    token_limit_exceeded,
)
from src.models.health import HealthCheckResult, HealthStatus
from src.models.model_class import ModelClass, ProviderFamily
from src.models.request import InferenceRequest
from src.models.response import InferenceResponse, TokenUsage
from src.observability.logger import get_logger
from src.router.policy import models_for_provider, optimal_model, resolve_provider
from src.services.base import InferenceService, resolve_model

logger = get_logger(__name__)


class LiteLLMInferenceService(InferenceService):
    """
    Inference service backed by LiteLLM completions

    Retries are delegated to LiteLLM (num_retries); the service itself never
    retries a failed call.
    """

    def __init__(
        self,
        provider: Union[ProviderFamily, str, None] = None,
        timeout_seconds: Optional[float] = None,
        max_retries: Optional[int] = None,
    ):
        self.provider = resolve_provider(provider or os.getenv("INFERENCE_PROVIDER", "openai"))
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else float(os.getenv("INFERENCE_TIMEOUT_SECONDS", "30"))
        )
        self.max_retries = (
            max_retries
            if max_retries is not None
            else int(os.getenv("INFERENCE_MAX_RETRIES", "0"))
        )

    @property
    def default_model(self) -> str:
        return optimal_model(ModelClass.GENERAL, self.provider)

    def _check_token_budget(self, model: str, prompt_tokens: int, max_tokens: Optional[int]):
        """Reject requests that cannot fit the model's known limits"""
        model_info = litellm.model_cost.get(model)
        if not model_info:
            return

        max_output_tokens = model_info.get("max_output_tokens")
        if max_output_tokens and max_tokens and max_tokens > max_output_tokens:
            raise token_limit_exceeded(max_output_tokens, max_tokens)

        max_input_tokens = model_info.get("max_input_tokens")
        if max_input_tokens and prompt_tokens > max_input_tokens:
            raise context_window_exceeded(max_input_tokens, prompt_tokens)

    async def _call_litellm(self, params: Dict[str, Any]) -> Any:
        """Call LiteLLM with timeout, translating provider errors"""
        provider_name = self.provider.value
        try:
            return await asyncio.wait_for(
                litellm.acompletion(**params),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise NetworkError(f"Request timeout after {self.timeout_seconds}s") from None
        except litellm.RateLimitError as e:
            raise rate_limit_exceeded(provider_name) from e
        except litellm.AuthenticationError as e:
            raise invalid_api_key(provider_name) from e
        except litellm.ContextWindowExceededError as e:
            model_info = litellm.model_cost.get(params["model"]) or {}
            raise ContextWindowExceededError(
                f"Context window exceeded for {params['model']}: {e}",
                max_tokens=model_info.get("max_input_tokens") or 0,
                actual_tokens=params.get("max_tokens", 0),
            ) from e
        except (litellm.Timeout, litellm.APIConnectionError) as e:
            raise NetworkError(f"{provider_name} connection failed: {e}") from e
        except Exception as e:
            raise generation_failed(str(e)) from e

    async def infer(self, request: InferenceRequest) -> InferenceResponse:
        start_time = time.monotonic()

        rendered = request.render_template()
        model = resolve_model(request, self.provider)
        prompt_tokens = self.count_tokens(rendered, model=model)
        self._check_token_budget(model, prompt_tokens, request.max_tokens)

        params: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": rendered}],
        }
        if request.max_tokens:
            params["max_tokens"] = request.max_tokens
        if request.temperature is not None:
            params["temperature"] = request.temperature
        if self.max_retries:
            params["num_retries"] = self.max_retries

        logger.debug("dispatching inference model=%s prompt_tokens=%d", model, prompt_tokens)

        try:
            response = await self._call_litellm(params)
        except InferenceError as e:
            logger.warning("inference failed model=%s kind=%s: %s", model, e.kind.value, e.message)
            raise

        content = response.choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        reported_prompt = getattr(usage, "prompt_tokens", None)
        reported_completion = getattr(usage, "completion_tokens", None)
        token_usage = TokenUsage(
            prompt_tokens=reported_prompt if reported_prompt is not None else prompt_tokens,
            completion_tokens=(
                reported_completion
                if reported_completion is not None
                else self.count_tokens(content, model=model)
            ),
        )

        processing_time_ms = round((time.monotonic() - start_time) * 1000)
        result = InferenceResponse.from_text(
            content,
            getattr(response, "model", None) or model,
            token_usage,
            processing_time_ms,
        )
        return result.model_copy(update={
            "metadata": result.metadata.with_metadata("provider", self.provider.value),
        })

    async def health_check(self) -> HealthCheckResult:
        try:
            environment = litellm.validate_environment(model=self.default_model)
        except Exception as e:
            raise InferenceError(f"Unable to determine {self.provider.value} health: {e}") from e

        if not environment.get("keys_in_environment"):
            missing = ", ".join(environment.get("missing_keys", [])) or "credentials"
            status = HealthStatus.unhealthy(f"Missing {missing} for {self.provider.value}")
        else:
            status = HealthStatus.healthy()

        return (
            HealthCheckResult(status=status)
            .with_metadata("service", "litellm")
            .with_metadata("provider", self.provider.value)
            .with_metadata("model", self.default_model)
        )

    def supported_models(self) -> List[str]:
        return models_for_provider(self.provider)

    def count_tokens(self, text: str, model: Optional[str] = None) -> int:
        try:
            return litellm.token_counter(model=model or self.default_model, text=text)
        except Exception as e:
            raise generation_failed(f"token counting failed: {e}") from e

