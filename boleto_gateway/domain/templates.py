"""Placeholder substitution for tenant message templates"""

import re
from typing import Mapping

# {{ name }}, {{$name}}, {{  $name  }}
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*\$?([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def render_template(template: str, values: Mapping[str, str]) -> str:
    """
    Substitute known placeholders in a tenant template.

    The template is scanned once, so replacement text is inserted literally
    and never re-scanned for placeholders. Unknown placeholders are kept
    verbatim.

    Example:
        render_template("Vencimento: {{data_vencimento}}", {"data_vencimento": "10/05/2024"})
        → "Vencimento: 10/05/2024"
    """

    def substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in values:
            return values[name]
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(substitute, template)
