"""Inference service interface"""

from abc import ABC, abstractmethod
from typing import List, Union

from src.models.health import HealthCheckResult
from src.models.model_class import ProviderFamily
from src.models.request import InferenceRequest
from src.models.response import InferenceResponse
from src.router.policy import optimal_model


class InferenceService(ABC):
    """
    Template-based inference service

    Backends hold only read-only configuration so concurrent calls on one
    instance stay independent. Failures raise InferenceError subclasses; an
    unavailable backend is reported by health_check as an Unhealthy status,
    not raised.
    """

    @abstractmethod
    async def infer(self, request: InferenceRequest) -> InferenceResponse:
        """Render the request template, generate, and return a normalized response"""
        raise NotImplementedError

    @abstractmethod
    async def health_check(self) -> HealthCheckResult:
        """Report backend availability"""
        raise NotImplementedError

    @abstractmethod
    def supported_models(self) -> List[str]:
        """Models this backend can serve"""
        raise NotImplementedError

    @abstractmethod
    def count_tokens(self, text: str) -> int:
        """Approximate token count for text"""
        raise NotImplementedError


def resolve_model(
    request: InferenceRequest,
    provider: Union[ProviderFamily, str],
) -> str:
    """Request override if present, otherwise the policy model for the provider"""
    if request.model_override:
        return request.model_override
    return optimal_model(request.model_class, provider)
