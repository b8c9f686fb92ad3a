"""Minimal URI Template (RFC 6570) expander.

Only two expression forms are understood:

    {?page,size}   form-style query expansion
    {id}           simple string expansion

Anything else (reserved/fragment/label/path/matrix operators, explode and
prefix modifiers) is rejected with TemplateError instead of being guessed at.

Unresolved simple placeholders are left in the output verbatim, so callers
can detect an incomplete expansion by looking for a remaining ``{``.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

from halkit.errors import TemplateError
from halkit.hal.types import Variables

QUERY_EXPRESSION = re.compile(r"\{\?([^}]+)\}")
PLACEHOLDER = re.compile(r"\{[^}]+\}")
ANY_EXPRESSION = re.compile(r"\{([^}]*)\}")

UNSUPPORTED_OPERATORS = "+#./;&"

# Characters encodeURIComponent leaves alone besides alphanumerics.
_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: Any) -> str:
    """Percent-encode a variable value as a URI component."""
    return quote(stringify(value), safe=_COMPONENT_SAFE)


def stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def validate(href: str) -> None:
    """Raise TemplateError if ``href`` uses syntax outside the supported subset."""
    for match in ANY_EXPRESSION.finditer(href):
        expression = match.group(1)
        if expression and expression[0] in UNSUPPORTED_OPERATORS:
            raise TemplateError(
                f"Unsupported URI template operator '{expression[0]}' in {match.group(0)}",
                template=href,
            )
        names = expression[1:] if expression.startswith("?") else expression
        for name in names.split(","):
            name = name.strip()
            if name.endswith("*") or ":" in name:
                raise TemplateError(
                    f"Unsupported URI template modifier in {match.group(0)}",
                    template=href,
                )


def expand_query(href: str, variables: Variables) -> str:
    """Expand the first ``{?a,b}`` expression found in ``href``."""
    match = QUERY_EXPRESSION.search(href)
    if not match:
        return href

    pairs: list[str] = []
    for name in (part.strip() for part in match.group(1).split(",")):
        value = variables.get(name)
        if value is None or value == "":
            continue
        pairs.append(f"{name}={encode_component(value)}")

    separator = "&" if "?" in href[: match.start()] else "?"
    replacement = separator + "&".join(pairs) if pairs else ""
    return href[: match.start()] + replacement + href[match.end() :]


def expand_path(href: str, variables: Variables) -> str:
    """Replace every ``{name}`` placeholder that has a non-null value."""
    result = href
    for placeholder in PLACEHOLDER.findall(href):
        value = variables.get(placeholder[1:-1].strip())
        if value is not None:
            result = result.replace(placeholder, encode_component(value))
    return result


def expand(href: str, variables: Variables | None = None) -> str:
    """Expand a URI template: query expression first, then path placeholders."""
    variables = variables or {}
    validate(href)
    return expand_path(expand_query(href, variables), variables)


def is_fully_expanded(href: str) -> bool:
    return PLACEHOLDER.search(href) is None
