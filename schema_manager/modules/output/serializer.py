"""JSON-LD serialisation and ``<script>`` embedding."""

import json
from typing import Any, Iterable

SCRIPT_TEMPLATE = '<script type="application/ld+json">{}</script>'


def to_json_ld(schema: Any) -> str:
    """Pretty-print *schema* with unescaped Unicode and slashes."""
    return json.dumps(schema, ensure_ascii=False, indent=4)


def to_script_tag(schema: Any) -> str:
    return SCRIPT_TEMPLATE.format(to_json_ld(schema))


def render_head(schemas: Iterable[Any]) -> str:
    """One script tag per non-empty schema, in order, newline-terminated."""
    return "".join(to_script_tag(s) + "\n" for s in schemas if s)
