"""Attachment links inside message text.

A link is an nhash followed by a percent-encoded filename, optionally
prefixed with htree:// or nhash://, e.g.

    htree://nhash1qqs.../holiday%20photo.jpg

Message text comes from other users, so parsing never raises: anything
that does not look like a link is left in the text as-is.
"""

import posixpath
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from urllib.parse import quote, unquote

from .bech32 import CHARSET
from .types import DEFAULT_PREVIEW_LENGTH, LINK_SCHEMES


FILE_LINK_PATTERN = re.compile(
    r"(?:htree://|nhash://)?nhash1[" + CHARSET + r"]+/\S+",
    re.IGNORECASE,
)

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".bmp"})

# Characters left unescaped in a URI component besides letters and digits
_URI_COMPONENT_SAFE = "-_.!~*'()"
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class FileLink:
    """Attachment link parsed from message text."""
    nhash: str
    filename: str
    filename_encoded: str

    @property
    def raw_link(self) -> str:
        """The link without scheme, as embedded in messages."""
        return f"{self.nhash}/{self.filename_encoded}"


@dataclass(frozen=True)
class FileLinkExtraction:
    """Message text with attachment links removed."""
    text: str
    links: List[FileLink] = field(default_factory=list)


def format_file_link(nhash: str, filename: str) -> str:
    """Build a link for an nhash and a display filename."""
    return f"{nhash}/{quote(filename, safe=_URI_COMPONENT_SAFE)}"


def parse_file_link(value: str) -> Optional[FileLink]:
    """
    Parse a single attachment link.

    Args:
        value: Link text, with or without an htree:// or nhash:// scheme

    Returns:
        FileLink, or None if the value is not an attachment link
    """
    cleaned = value.strip()
    lowered = cleaned.lower()
    for scheme in LINK_SCHEMES:
        if lowered.startswith(scheme):
            cleaned = cleaned[len(scheme):]
            break

    slash = cleaned.find("/")
    if slash <= 0 or slash == len(cleaned) - 1:
        return None

    nhash = cleaned[:slash].strip()
    if not nhash.lower().startswith("nhash1"):
        return None

    filename_encoded = cleaned[slash + 1:].strip()
    if not filename_encoded:
        return None

    return FileLink(
        nhash=nhash,
        filename=_decode_filename(filename_encoded),
        filename_encoded=filename_encoded,
    )


def _decode_filename(encoded: str) -> str:
    if _MALFORMED_ESCAPE.search(encoded):
        return encoded
    try:
        return unquote(encoded, errors="strict")
    except UnicodeDecodeError:
        return encoded


def extract_file_links(text: str) -> FileLinkExtraction:
    """
    Remove attachment links from message text.

    Links are collected in order of appearance. Matches that fail to parse
    stay in the text unchanged.

    Args:
        text: Message text

    Returns:
        FileLinkExtraction with the stripped text and the parsed links
    """
    links = []

    def _strip(match: "re.Match[str]") -> str:
        parsed = parse_file_link(match.group(0))
        if parsed is None:
            return match.group(0)
        links.append(parsed)
        return ""

    stripped = FILE_LINK_PATTERN.sub(_strip, text)
    return FileLinkExtraction(text=stripped.strip(), links=links)


def append_links_to_message(text: str, links: Sequence[str]) -> str:
    """
    Append attachment links to message text, one per line.

    Args:
        text: Message text (may be empty)
        links: Link strings; blank entries are dropped

    Returns:
        Message content with links appended
    """
    trimmed = text.strip()
    normalized = [link.strip() for link in links if link.strip()]

    if not normalized:
        return trimmed
    if not trimmed:
        return "\n".join(normalized)
    return trimmed + "\n" + "\n".join(normalized)


def build_attachment_aware_preview(text: str, max_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """
    Build a short conversation-list preview for a message.

    Attachment-only messages are summarized as "Attachment: <name>" or
    "<n> attachments". Previews longer than max_length are truncated with
    a trailing "...".
    """
    extracted = extract_file_links(text)
    preview = extracted.text

    if not preview and extracted.links:
        if len(extracted.links) == 1:
            preview = f"Attachment: {extracted.links[0].filename}"
        else:
            preview = f"{len(extracted.links)} attachments"

    if len(preview) <= max_length:
        return preview
    return preview[:max_length] + "..."


def is_image_filename(filename: str) -> bool:
    """Check if a filename has a common image extension."""
    _, ext = posixpath.splitext(filename)
    return ext.lower() in IMAGE_EXTENSIONS
