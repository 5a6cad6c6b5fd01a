"""Parser for serialised block markup.

Content is stored as HTML with comment delimiters around each block::

    <!-- wp:details {"summary":"Q?"} -->
    <details><summary>Q?</summary><!-- wp:paragraph --><p>A.</p><!-- /wp:paragraph --></details>
    <!-- /wp:details -->

``parse_blocks`` turns that into a tree of :class:`Block` records, and
``render_block`` turns a block back into HTML.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from schema_manager.records import Block

logger = logging.getLogger(__name__)

_DELIMITER_RE = re.compile(
    r"<!--\s+(?P<closer>/)?wp:(?P<namespace>[a-z][a-z0-9_-]*/)?(?P<name>[a-z][a-z0-9_-]*)"
    r"\s+(?P<attrs>\{.*?\}\s+)?(?P<void>/)?-->",
    re.DOTALL,
)


@dataclass
class _Frame:
    name: str
    attrs: dict[str, Any]
    html: list[str] = field(default_factory=list)
    content: list[Optional[str]] = field(default_factory=list)
    children: list[Block] = field(default_factory=list)

    def to_block(self) -> Block:
        return Block(
            name=self.name,
            inner_html="".join(self.html),
            attrs=self.attrs,
            inner_blocks=tuple(self.children),
            inner_content=tuple(self.content),
        )


def _parse_attrs(raw: Optional[str]) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        attrs = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed block attributes: %r", raw[:80])
        return {}
    return attrs if isinstance(attrs, dict) else {}


def parse_blocks(document: str) -> tuple[Block, ...]:
    """Parse *document* into a tuple of top-level blocks.

    Non-blank HTML outside any block becomes a freeform block with
    ``name=None``.  Unclosed blocks are closed at the end of the document;
    stray closing delimiters are dropped.
    """
    output: list[Block] = []
    stack: list[_Frame] = []

    def add_text(text: str) -> None:
        if not text:
            return
        if stack:
            stack[-1].html.append(text)
            stack[-1].content.append(text)
        elif text.strip():
            output.append(Block(name=None, inner_html=text, inner_content=(text,)))

    def add_block(block: Block) -> None:
        if stack:
            stack[-1].children.append(block)
            stack[-1].content.append(None)
        else:
            output.append(block)

    position = 0
    for match in _DELIMITER_RE.finditer(document or ""):
        add_text(document[position:match.start()])
        position = match.end()

        name = (match.group("namespace") or "core/") + match.group("name")
        if match.group("void"):
            add_block(Block(name=name, attrs=_parse_attrs(match.group("attrs"))))
        elif match.group("closer"):
            if stack and stack[-1].name == name:
                add_block(stack.pop().to_block())
            else:
                logger.debug("Dropping unmatched closing delimiter for %s", name)
        else:
            stack.append(_Frame(name=name, attrs=_parse_attrs(match.group("attrs"))))

    add_text((document or "")[position:])
    while stack:
        add_block(stack.pop().to_block())

    return tuple(output)


def render_block(block: Block) -> str:
    """Serialise a block back to HTML, children in their source positions."""
    if not block.inner_content:
        return block.inner_html + "".join(render_block(b) for b in block.inner_blocks)

    children = iter(block.inner_blocks)
    parts = []
    for chunk in block.inner_content:
        if chunk is None:
            child = next(children, None)
            if child is not None:
                parts.append(render_block(child))
        else:
            parts.append(chunk)
    return "".join(parts)
