"""Tests for script-based language detection."""

import pytest

from helpdesk.domain.policies.language import detect_language
from helpdesk.domain.value_objects.enums import Language


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Приложение не открывается", Language.RU),
        ("Касса ишламаяпти, ёрдам беринг", Language.MIXED),
        ("Тўлов ўтмади", Language.UZ_CYRILLIC),
        ("Қачонгача кутамиз?", Language.UZ_CYRILLIC),
        ("Kassa ishlamayapti, iltimos yordam bering", Language.UZ_LATIN),
        ("To'lov o'tmadi", Language.UZ_LATIN),
        ("The app is not working", Language.EN),
        ("12345 !!!", Language.MIXED),
        ("", Language.MIXED),
    ],
)
def test_detect_language(text, expected):
    assert detect_language(text) == expected
