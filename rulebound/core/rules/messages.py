"""
Error message templates and rendering.

Templates use ":placeholder" markers. ":attribute" is always replaced by the
field's display label; other markers come from the failing validator.
"""

import re
from typing import Any

DEFAULT_MESSAGES = {
    "required": "The :attribute field is required.",
    "numeric": "The :attribute must be a number.",
    "integer": "The :attribute must be an integer.",
    "string": "The :attribute must be a string.",
    "boolean": "The :attribute field must be true or false.",
    "min": "The :attribute must be at least :min.",
    "max": "The :attribute may not be greater than :max.",
    "between": "The :attribute must be between :min and :max.",
    "regex": "The :attribute format is invalid.",
    "email": "The :attribute must be a valid email address.",
    "in": "The selected :attribute is invalid.",
    "exists": "The selected :attribute is invalid.",
    "unique": "The :attribute has already been taken.",
}

FALLBACK_MESSAGE = "The :attribute is invalid."


def resolve_template(field_name: str, rule_name: str, messages: dict[str, str]) -> str:
    """
    Pick the template for a failed rule.

    Lookup order: "<field>.<rule>", "<field>", "<rule>" in the custom
    messages, then the built-in default for the rule.
    """
    for key in (f"{field_name}.{rule_name}", field_name, rule_name):
        if key in messages:
            return messages[key]
    return DEFAULT_MESSAGES.get(rule_name, FALLBACK_MESSAGE)


def render_message(template: str, attribute: str, params: dict[str, Any] | None = None) -> str:
    """Replace ":attribute" and parameter markers in a template."""
    replacements = {"attribute": attribute, **{key: str(value) for key, value in (params or {}).items()}}

    # Longest keys first so ":maximum" is not clobbered by ":max"; one pass so
    # substituted text is never rescanned
    keys = sorted(replacements, key=len, reverse=True)
    pattern = re.compile(":(" + "|".join(re.escape(key) for key in keys) + ")")
    return pattern.sub(lambda match: replacements[match.group(1)], template)
