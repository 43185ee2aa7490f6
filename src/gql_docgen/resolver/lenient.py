"""Lenient JSON parsing for payloads carrying disabled keys.

Disabled keys are stored inline as `/* ... */` block comments, which plain
JSON rejects. The comment pattern removes the innermost comment or a stray
delimiter and does not track nesting: a disabled field whose value holds
another disabled field leaves residue behind (typically a trailing comma),
and the parse then falls back to the raw text.
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

COMMENT_PATTERN = re.compile(r"/\*(?:(?!/\*|\*/)[\s\S])*\*/|/\*|\*/")


def strip_comments(text: str) -> str:
    return COMMENT_PATTERN.sub("", text)


def parse_lenient(text: str) -> Any:
    """Parse `text` as JSON once disabled keys are stripped.

    Returns the parsed value, or `text` itself (the same object) when it
    does not parse.
    """
    try:
        return json.loads(strip_comments(text))
    except (ValueError, TypeError, RecursionError):
        logger.debug("Lenient parse fell back to raw text: %.60r", text)
        return text


def is_unresolved(original: str, parsed: Any) -> bool:
    """True when `parsed` is the raw-text fallback of `parse_lenient(original)`."""
    return parsed is original
