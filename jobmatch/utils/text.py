"""Plain-text helpers for fetched posts, resume chunks and reports."""

import html
import re
from typing import List


def clean_html(html_text: str) -> str:
    """Reduce an HTML page or fragment to readable plain text.

    Steps:
    1. Drop <script> and <style> blocks
    2. Decode entities (&amp; -> &)
    3. Turn <br>, </p>, </li> and </div> into line breaks
    4. Strip remaining tags
    5. Collapse horizontal whitespace and runs of blank lines

    Args:
        html_text: Text containing HTML markup

    Returns:
        Plain text with paragraph breaks preserved
    """
    if not html_text:
        return ""

    text = re.sub(r"<(script|style)[^>]*>.*?</\1>", " ", html_text, flags=re.IGNORECASE | re.DOTALL)
    text = html.unescape(text)
    text = re.sub(r"<br\s*/?>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"</(p|li|div|h[1-6])>", "\n\n", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", " ", text)
    text = re.sub(r"[ \t\r\f\v]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)

    return text.strip()


def split_paragraphs(text: str) -> List[str]:
    """Split text into blank-line separated chunks.

    A text with no blank lines is split per line instead, so that a
    bullet-list resume still yields more than one chunk.

    Example:
        >>> split_paragraphs("React\\nNode.js")
        ['React', 'Node.js']
    """
    if not text or not text.strip():
        return []

    chunks = [chunk.strip() for chunk in re.split(r"\n\s*\n", text.strip())]
    chunks = [chunk for chunk in chunks if chunk]
    if len(chunks) > 1:
        return chunks

    return [line.strip() for line in text.splitlines() if line.strip()]


def truncate_text(text: str, max_length: int = 500, suffix: str = "...") -> str:
    """Truncate text to ``max_length`` characters, preferring a word boundary.

    Example:
        >>> truncate_text("This is a very long text that needs truncating", max_length=30)
        'This is a very long text...'
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix[:max_length]

    truncated = text[:truncate_at]
    last_space = truncated.rfind(" ")
    if last_space > truncate_at * 0.8:
        truncated = truncated[:last_space]

    return truncated.rstrip() + suffix
