"""Script-based language detection.

Advisory only: used for vocabulary mining and diagnostics, never to gate a
classification decision. Cyrillic text without Uzbek-specific or
Russian-only letters cannot be attributed reliably and is reported as
``mixed``.
"""

import re

from helpdesk.domain.value_objects.enums import Language

_UZ_CYRILLIC_LETTERS = re.compile(r"[ўқғҳ]", re.IGNORECASE)
_RU_ONLY_LETTERS = re.compile(r"[ыэъь]", re.IGNORECASE)
_CYRILLIC = re.compile(r"[а-яё]", re.IGNORECASE)
_LATIN = re.compile(r"[a-z]", re.IGNORECASE)

UZ_LATIN_MARKERS = (
    "salom", "rahmat", "raxmat", "kerak", "qanday", "yoq", "yo'q", "lekin",
    "emas", "iltimos", "uchun", "bilan", "nima", "nega", "qachon", "bor",
)
_UZ_LATIN_WORDS = re.compile(
    r"\b(" + "|".join(re.escape(w) for w in UZ_LATIN_MARKERS) + r")\b|[og]['ʻ’`]",
    re.IGNORECASE,
)


def detect_language(text: str) -> Language:
    if not text:
        return Language.MIXED

    if _UZ_CYRILLIC_LETTERS.search(text):
        return Language.UZ_CYRILLIC
    if _CYRILLIC.search(text):
        if _RU_ONLY_LETTERS.search(text):
            return Language.RU
        return Language.MIXED
    if _LATIN.search(text):
        if _UZ_LATIN_WORDS.search(text):
            return Language.UZ_LATIN
        return Language.EN
    return Language.MIXED
