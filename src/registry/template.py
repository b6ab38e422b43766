"""Safe template rendering for metadata documents.

A minimal engine supporting {{variable}} placeholders without code
execution.

Usage:
    from src.registry.template import render_template

    render_template('<text>{{name}}</text>', {"name": "Peach"})
    # '<text>Peach</text>'

Substitution is a single pass: placeholder-like text inside a substituted
value is left as-is, so a name such as "{{hex}}" renders literally.
"""

from __future__ import annotations

import re
from typing import Any


# Matches {{variable}} or {{ variable }}
VARIABLE_PATTERN = re.compile(r"\{\{\s*([a-zA-Z_][a-zA-Z0-9_]*)\s*\}\}")


def render_template(template: str, context: dict[str, Any]) -> str:
    """Render a template with context values.

    Missing variables render as the empty string.

    Examples:
        >>> render_template("#{{hex}}", {"hex": "FFDAB9"})
        '#FFDAB9'

        >>> render_template("{{missing}}", {})
        ''
    """
    if not template:
        return ""

    def replace_variable(match: re.Match[str]) -> str:
        value = context.get(match.group(1))
        if value is None:
            return ""
        return str(value)

    return VARIABLE_PATTERN.sub(replace_variable, template)
