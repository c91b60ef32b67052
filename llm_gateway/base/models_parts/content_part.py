"""
Structured content part for user/assistant plain-text messages.

A plain-text message may carry either a raw string or an ordered list of
parts. Parts are either text or an image reference given as a URL. Image URLs
using the ``data:<mime>;base64,<payload>`` form are considered inline; any
other URL is a network image, which some vendors refuse.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

ContentPartType = Literal["text", "image_url"]

DATA_URL_PREFIX = "data:"
BASE64_MARKER = ";base64,"


@dataclass(frozen=True)
class ContentPart:
    """A single piece of structured message content.

    Attributes:
        type: ``"text"`` or ``"image_url"``.
        text: Text payload for ``text`` parts.
        url: Image location for ``image_url`` parts (inline data URL or
            network URL).
    """

    type: ContentPartType
    text: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def of_image(cls, url: str) -> "ContentPart":
        return cls(type="image_url", url=url)

    def inline_image(self) -> Optional[Tuple[str, str]]:
        """Return ``(mime_type, base64_data)`` for inline images, else ``None``."""
        if self.type != "image_url" or not self.url:
            return None
        if not self.url.startswith(DATA_URL_PREFIX):
            return None
        head, sep, data = self.url[len(DATA_URL_PREFIX):].partition(BASE64_MARKER)
        if not sep:
            return None
        return head, data

    def to_dict(self) -> Dict[str, Any]:
        if self.type == "text":
            return {"type": "text", "text": self.text or ""}
        return {"type": "image_url", "image_url": {"url": self.url}}


__all__ = ["ContentPart", "ContentPartType", "DATA_URL_PREFIX", "BASE64_MARKER"]
