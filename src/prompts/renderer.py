"""
Template renderer

Flat ``{{key}}`` substitution. Placeholders are replaced in a single
left-to-right pass; longer keys are tried first where placeholders could
overlap, and substituted values are never scanned again, so the output does
not depend on the order of the parameter mapping. Placeholders without a
matching parameter are left as they are.
"""

import re
from typing import Dict, List, Mapping

_PLACEHOLDER_PATTERN = re.compile(r"\{\{(.+?)\}\}", re.DOTALL)


def _placeholder(key: str) -> str:
    return "{{" + key + "}}"


def render(template: str, parameters: Mapping[str, str]) -> str:
    """Render template with parameters"""
    if not parameters:
        return template

    keys = sorted(parameters, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(_placeholder(key)) for key in keys))
    lookup: Dict[str, str] = {_placeholder(key): parameters[key] for key in keys}

    return pattern.sub(lambda match: lookup[match.group(0)], template)


def extract_placeholders(template: str) -> List[str]:
    """Extract placeholder names in order of first occurrence"""
    names: List[str] = []
    for name in _PLACEHOLDER_PATTERN.findall(template):
        if name not in names:
            names.append(name)
    return names


def missing_parameters(template: str, parameters: Mapping[str, str]) -> List[str]:
    """Placeholders in template that parameters do not resolve"""
    return [name for name in extract_placeholders(template) if name not in parameters]
