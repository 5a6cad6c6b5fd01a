"""Schema composition and JSON-LD output."""

from schema_manager.modules.output.composer import SchemaComposer, decode_custom_json
from schema_manager.modules.output.serializer import render_head, to_json_ld, to_script_tag

__all__ = [
    "SchemaComposer",
    "decode_custom_json",
    "render_head",
    "to_json_ld",
    "to_script_tag",
]
