from typing import Iterable, List, Optional

from photofind.models import LabelSet


def split_custom_labels(raw: Optional[str]) -> List[str]:
    """Split the uploader's comma-separated label string."""
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]


def normalize(*sources: Iterable[str]) -> LabelSet:
    """Merge label lists from any number of sources into one canonical set.

    Entries are trimmed and lowercased; empties are dropped and duplicates
    collapse onto the lowercased value. The result is sorted so documents for
    the same labels are byte-identical.
    """
    seen = set()
    for source in sources:
        for label in source or ():
            s = str(label).strip().lower()
            if s:
                seen.add(s)
    return tuple(sorted(seen))
