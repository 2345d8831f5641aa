import logging
import re
from typing import Callable, List, Optional

from photofind.services.search_base import Intent

logger = logging.getLogger("photofind.query")

# ",", ";" and "and" used as a conjunction all separate keywords
_SEPARATORS = re.compile(r"[, ]+and[, ]+|,|;")


def tokenize(raw: str) -> List[str]:
    return [s.strip() for s in _SEPARATORS.split(raw.lower()) if s.strip()]


def resolve(query: str, preferred: Callable[[str], str]) -> str:
    """Try the preferred source; fall back to the query itself on error or empty answer."""
    try:
        value = preferred(query)
    except Exception as e:
        logger.warning("Intent extraction failed for %r, falling back to raw query: %r", query, e)
        value = ""
    return (value or query).strip()


class QueryInterpreter:
    def __init__(self, intent: Optional[Intent] = None):
        self.intent = intent

    def interpret(self, raw_query: Optional[str]) -> List[str]:
        query = (raw_query or "").strip()
        if not query:
            return []

        raw = resolve(query, self.intent.slot_value) if self.intent is not None else query
        if not raw:
            return []

        keywords = tokenize(raw)
        logger.info("Parsed keywords for %r: %s", query, keywords)
        return keywords
