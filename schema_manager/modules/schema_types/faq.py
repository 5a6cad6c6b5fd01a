"""FAQPage schema type and the accordion question/answer extractor.

Questions come from accordion (``core/details``) blocks in the item's block
tree.  When the tree holds no accordion at the top level, the already
rendered body HTML is scanned for literal ``<details><summary>`` pairs.
"""

import logging
import re
from typing import Any, Iterable, Optional

from schema_manager.modules.content.block_parser import render_block
from schema_manager.modules.schema_types.fields import SchemaObject, finalize
from schema_manager.records import Block, CommerceItem, ContentItem
from schema_manager.settings import SiteSettings
from schema_manager.utils.helpers import strip_all_tags

logger = logging.getLogger(__name__)

ACCORDION_BLOCK = "core/details"

_SUMMARY_RE = re.compile(r"<summary[^>]*>(.*?)</summary>", re.IGNORECASE | re.DOTALL)
_AFTER_SUMMARY_RE = re.compile(r"</summary>(.*?)</details>", re.IGNORECASE | re.DOTALL)
_DETAILS_RE = re.compile(
    r"<details[^>]*>\s*<summary[^>]*>(.*?)</summary>(.*?)</details>",
    re.IGNORECASE | re.DOTALL,
)


def build_question(question: str, answer: str) -> dict[str, Any]:
    return {
        "@type": "Question",
        "name": question,
        "acceptedAnswer": {
            "@type": "Answer",
            "text": answer,
        },
    }


class FaqExtractor:
    """Pull ordered Question objects out of a content item."""

    def extract(self, blocks: Iterable[Block], body: str = "") -> list[dict[str, Any]]:
        blocks = list(blocks)
        accordions = [b for b in blocks if b.name == ACCORDION_BLOCK]
        if accordions:
            questions = self._from_blocks(accordions)
        else:
            questions = self._from_html(body)
        logger.debug("Extracted %d FAQ questions", len(questions))
        return questions

    def _from_blocks(self, accordions: list[Block]) -> list[dict[str, Any]]:
        questions = []
        for block in accordions:
            question = self.summary_text(block)
            answer = self.answer_text(block)
            if question and answer:
                questions.append(build_question(question, answer))
        return questions

    @staticmethod
    def summary_text(block: Block) -> str:
        match = _SUMMARY_RE.search(block.inner_html)
        if match:
            return strip_all_tags(match.group(1))
        summary = block.attrs.get("summary", "")
        return summary.strip() if isinstance(summary, str) else ""

    @staticmethod
    def answer_text(block: Block) -> str:
        parts = []
        for child in block.inner_blocks:
            text = strip_all_tags(render_block(child))
            if text:
                parts.append(text)
        if parts:
            return " ".join(parts)

        match = _AFTER_SUMMARY_RE.search(block.inner_html)
        if match:
            return strip_all_tags(match.group(1))
        return ""

    @staticmethod
    def _from_html(body: str) -> list[dict[str, Any]]:
        questions = []
        for match in _DETAILS_RE.finditer(body or ""):
            question = strip_all_tags(match.group(1))
            answer = strip_all_tags(match.group(2))
            if question and answer:
                questions.append(build_question(question, answer))
        return questions


class FAQPageSchema:
    def __init__(self, extractor: Optional[FaqExtractor] = None) -> None:
        self._extractor = extractor or FaqExtractor()

    def get_type(self) -> str:
        return "FAQPage"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        data: dict[str, Any] = {}
        if item is not None:
            data["name"] = item.title
            data["url"] = item.url
            questions = self._extractor.extract(item.blocks, item.body)
            if questions:
                data["mainEntity"] = questions

        return finalize(self.get_type(), data)
