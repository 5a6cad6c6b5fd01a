"""Content store access and block-markup parsing."""

from schema_manager.modules.content.block_parser import parse_blocks, render_block
from schema_manager.modules.content.repository import ContentRepository

__all__ = ["ContentRepository", "parse_blocks", "render_block"]
