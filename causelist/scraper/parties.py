from __future__ import annotations

import re
from typing import Optional, Tuple

from .models import UNKNOWN
from .utils import clean_text

# Standalone "vs", "vs.", "v", "v." or "versus"; initials such as "K.V." are
# not separators because the token must be surrounded by whitespace.
VS_SEPARATOR = re.compile(r"\s+(?:versus|vs\.?|v\.?)\s+", re.IGNORECASE)


def split_parties(text: str) -> Optional[Tuple[str, str]]:
    """Split ``text`` into ``(petitioner, respondent)`` on the first vs token.

    Returns ``None`` when no separator is present. A side left empty by the
    split degrades to ``"Unknown"``.
    """

    parts = VS_SEPARATOR.split(clean_text(text), maxsplit=1)
    if len(parts) < 2:
        return None
    petitioner = parts[0].strip() or UNKNOWN
    respondent = parts[1].strip() or UNKNOWN
    return petitioner, respondent


__all__ = ["split_parties", "VS_SEPARATOR"]
