"""General-purpose text helpers shared by the schema builders."""

import re

from bs4 import BeautifulSoup


def strip_all_tags(html: str) -> str:
    """Strip HTML tags (and script/style bodies) and return trimmed text.

    Examples:
        >>> strip_all_tags("<p>Hello <b>world</b></p>")
        'Hello world'
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text().strip()


def truncate_chars(text: str, limit: int = 160, keep: int = 157, suffix: str = "...") -> str:
    """Cut *text* to *keep* characters plus *suffix* when longer than *limit*.

    Unlike a word-boundary truncation this cuts at an exact character count.

    Examples:
        >>> truncate_chars("a" * 161) == "a" * 157 + "..."
        True
        >>> truncate_chars("short")
        'short'
    """
    if len(text) > limit:
        return text[:keep] + suffix
    return text


def trim_words(text: str, num_words: int = 30, more: str = "…") -> str:
    """Keep the first *num_words* words of *text*, appending *more* if cut.

    Examples:
        >>> trim_words("one two three", 2)
        'one two…'
    """
    words = re.split(r"\s+", text.strip())
    words = [w for w in words if w]
    if len(words) > num_words:
        return " ".join(words[:num_words]) + more
    return " ".join(words)
