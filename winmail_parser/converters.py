# ============================================================================
# winmail_parser/converters.py
# ============================================================================

import logging
from typing import Optional

import html2text


class HtmlToTextConverter:
    """Renders an HTML body as plain text for previews."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def convert(self, html_content: str) -> str:
        """Convert HTML content to plain text."""
        if not html_content:
            return ""

        self.logger.debug(f"Converting HTML to text, input length: {len(html_content)}")
        h = html2text.HTML2Text()
        h.ignore_links = True
        h.ignore_images = True
        h.body_width = 0
        h.unicode_snob = True
        return h.handle(html_content).strip()
