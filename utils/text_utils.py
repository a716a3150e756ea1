"""Text helpers shared by the email proxy and the form page."""
import re
from typing import List

import markdown

ALLOWED_UPLOAD_EXTENSIONS = {"txt", "md"}

_HTML_TAG = re.compile(r"<[^>]+>")


def strip_html_tags(html: str) -> str:
    """Remove every ``<...>`` tag, leaving the text between them untouched."""
    return _HTML_TAG.sub("", html)


def parse_recipients(raw: str) -> List[str]:
    """
    Split comma-separated recipient text into addresses.

    Pieces are trimmed and empty pieces dropped, so extra whitespace and
    trailing commas are ignored.

    Args:
        raw: Recipient text as typed by the user

    Returns:
        Ordered list of non-empty recipient strings
    """
    return [piece.strip() for piece in raw.split(",") if piece.strip()]


def has_allowed_extension(filename: str) -> bool:
    """Check whether an uploaded filename ends in .txt or .md (case-insensitive)."""
    if not filename or "." not in filename:
        return False
    return filename.rsplit(".", 1)[-1].lower() in ALLOWED_UPLOAD_EXTENSIONS


def markdown_to_html(text: str) -> str:
    """Render summary Markdown to HTML for the email body."""
    return markdown.markdown(text, extensions=["sane_lists"])
