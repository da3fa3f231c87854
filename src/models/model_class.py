"""Model class and provider family enums"""

from enum import Enum
from typing import Union

from src.core.errors import invalid_model_type


class ModelClass(str, Enum):
    """Semantic intent of a request, used to pick models and token budgets"""
    CODING = "coding"  # Code generation and programming tasks
    REASONING = "reasoning"  # Complex reasoning and analysis
    GENERAL = "general"  # General text generation and conversation
    FAST = "fast"  # Quick responses for simple tasks
    CREATIVE = "creative"  # Creative writing and content generation

    @classmethod
    def parse(cls, value: Union["ModelClass", str]) -> "ModelClass":
        """Parse external input, accepting values or names in any case"""
        if isinstance(value, cls):
            return value
        candidate = str(value).strip().lower()
        for member in cls:
            if candidate in (member.value, member.name.lower()):
                return member
        raise invalid_model_type(str(value))


class ProviderFamily(str, Enum):
    """Provider families with a column in the model policy"""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
