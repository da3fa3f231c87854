"""
Model Class Policy - Static model selection per semantic intent

Each ModelClass maps to one model identifier per provider family and to a
default output token budget. These are lookup tables, not heuristics: adding a
ModelClass member means adding one row to each table below.
"""

from typing import Dict, List, Union

from src.core.errors import InferenceValidationError
from src.models.model_class import ModelClass, ProviderFamily


OPTIMAL_MODELS: Dict[ModelClass, Dict[ProviderFamily, str]] = {
    ModelClass.CODING: {
        ProviderFamily.OPENAI: "gpt-4o",
        ProviderFamily.ANTHROPIC: "claude-3-5-sonnet-20241022",
    },
    ModelClass.REASONING: {
        ProviderFamily.OPENAI: "gpt-4o",
        ProviderFamily.ANTHROPIC: "claude-3-5-sonnet-20241022",
    },
    ModelClass.GENERAL: {
        ProviderFamily.OPENAI: "gpt-4o-mini",
        ProviderFamily.ANTHROPIC: "claude-3-5-haiku-20241022",
    },
    ModelClass.FAST: {
        ProviderFamily.OPENAI: "gpt-3.5-turbo",
        ProviderFamily.ANTHROPIC: "claude-3-5-haiku-20241022",
    },
    ModelClass.CREATIVE: {
        ProviderFamily.OPENAI: "gpt-4o",
        ProviderFamily.ANTHROPIC: "claude-3-5-sonnet-20241022",
    },
}

DEFAULT_MAX_TOKENS: Dict[ModelClass, int] = {
    ModelClass.CODING: 4096,  # Longer code completions
    ModelClass.REASONING: 8192,  # Complex reasoning
    ModelClass.GENERAL: 2048,  # Standard responses
    ModelClass.FAST: 1024,  # Quick responses
    ModelClass.CREATIVE: 4096,  # Creative content
}


def resolve_provider(provider: Union[ProviderFamily, str]) -> ProviderFamily:
    """Parse a provider family name"""
    if isinstance(provider, ProviderFamily):
        return provider
    try:
        return ProviderFamily(str(provider).strip().lower())
    except ValueError:
        raise InferenceValidationError(
            f"Unknown provider family: {provider}",
            field="provider",
        ) from None


def optimal_model(
    model_class: ModelClass,
    provider: Union[ProviderFamily, str] = ProviderFamily.OPENAI,
) -> str:
    """Get the optimal model for a class with the given provider"""
    return OPTIMAL_MODELS[model_class][resolve_provider(provider)]


def default_max_tokens(model_class: ModelClass) -> int:
    """Get the typical max output tokens for a class"""
    return DEFAULT_MAX_TOKENS[model_class]


def models_for_provider(provider: Union[ProviderFamily, str]) -> List[str]:
    """Distinct model ids used for a provider, in table order"""
    family = resolve_provider(provider)
    models: List[str] = []
    for row in OPTIMAL_MODELS.values():
        if row[family] not in models:
            models.append(row[family])
    return models
