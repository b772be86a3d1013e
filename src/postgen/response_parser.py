# splits the generated text into the post body and the suggested photo order
import re
import logging
from typing import List, Optional, Tuple, Pattern

from .models import ParsedResult, PhotoItem

logger = logging.getLogger(__name__)

# boundary markers in priority order, priority only breaks ties on equal offsets
MARKER_PATTERNS: List[Pattern] = [
    re.compile(r'#{1,2}[^\n]*?SUGEROWANA KOLEJNOŚĆ ZDJĘĆ:', re.IGNORECASE),
    re.compile(r'#{1,2}[^\n]*?Kolejność zdjęć:', re.IGNORECASE),
    re.compile(r'#{1,2}[^\n]*?KOLEJNOŚĆ ZDJĘĆ:', re.IGNORECASE),
    re.compile(r'^---$', re.MULTILINE),
]

# "1. text", "2) text", "3- text", "Image 4: text"
PHOTO_LINE_PATTERN = re.compile(r'^(?:Image\s+)?(\d+)[.)\-:]\s*(.*)$', re.IGNORECASE)

# trailing bare separator line left between the post and the heading
TRAILING_SEPARATOR_PATTERN = re.compile(r'(?:^|\n)\s*---\s*$')

# parser for provider output with a post followed by a numbered photo list
class ResponseParser:
    """Split raw provider text into post content and photo order items"""

    def __init__(self, marker_patterns: Optional[List[Pattern]] = None):
        self.marker_patterns = marker_patterns if marker_patterns is not None else MARKER_PATTERNS

    # find the latest marker occurrence, returns (offset, length) or None
    def find_split_point(self, text: str) -> Optional[Tuple[int, int]]:
        best = None

        for pattern in self.marker_patterns:
            match = pattern.search(text)
            if not match:
                continue
            # strictly greater keeps the earlier pattern on equal offsets
            if best is None or match.start() > best[0]:
                best = (match.start(), len(match.group(0)))

        return best

    def parse(self, raw_text: str) -> ParsedResult:
        """Parse raw text into post and photo items, never raises"""
        split = self.find_split_point(raw_text)

        if split is None:
            logger.debug("No photo order marker found, returning whole text as post")
            return ParsedResult(post=raw_text.strip(), photo_items=[])

        offset, length = split
        post = TRAILING_SEPARATOR_PATTERN.sub('', raw_text[:offset]).strip()
        photo_section = raw_text[offset + length:].strip()

        photo_items = self.parse_lines(photo_section)
        logger.debug(f"Split at offset {offset}: {len(post)} chars of post, {len(photo_items)} photo items")

        return ParsedResult(post=post, photo_items=photo_items)

    # parse numbered lines of the photo order section
    def parse_lines(self, text: str) -> List[PhotoItem]:
        """Parse numbered photo order lines, skipping anything unnumbered"""
        items = []

        for line in text.split('\n'):
            line = line.strip()
            if not line:
                continue

            match = PHOTO_LINE_PATTERN.match(line)
            if not match:
                continue

            description = match.group(2).replace('**', '').strip()
            items.append(PhotoItem(position=int(match.group(1)) - 1, description=description))

        return items

_default_parser = ResponseParser()

def parse_response(raw_text: str) -> ParsedResult:
    """Parse provider text with the default marker set"""
    return _default_parser.parse(raw_text)

def parse_photo_order_lines(text: str) -> List[PhotoItem]:
    """Parse a photo order section into PhotoItem records"""
    return _default_parser.parse_lines(text)
