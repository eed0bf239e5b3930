"""Script-aware word counting.

Latin, Greek, Latin-1 accented and Arabic letters form whitespace-delimited
words; CJK ideographs and Hangul syllables count one word per character since
those scripts don't separate words with spaces.
"""

import re

_WORD_RUN = re.compile(
    r"[a-zA-Z0-9_\u0392-\u03c9\u00c0-\u00ff\u0600-\u06ff]+"
    r"|[\u4e00-\u9fff\u3400-\u4dbf\uf900-\ufaff\u3040-\u309f\uac00-\ud7af]+"
)

# Runs whose first code point is above this (U+4E00) are counted per character.
CJK_THRESHOLD = 19968


def count_words(text: str | None) -> int:
    """Count words in ``text``. Never fails; empty or non-text input counts 0."""
    if not text or not isinstance(text, str):
        return 0
    words = 0
    for match in _WORD_RUN.finditer(text):
        run = match.group()
        if ord(run[0]) > CJK_THRESHOLD:
            words += len(run)
        else:
            words += 1
    return words
