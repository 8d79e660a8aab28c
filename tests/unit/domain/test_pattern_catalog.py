"""Tests for PatternRule / PatternCatalog."""

import pytest

from helpdesk.domain.value_objects.default_patterns import DEFAULT_CATALOG
from helpdesk.domain.value_objects.pattern_catalog import (
    ANY_LANGUAGE,
    PatternCatalog,
    PatternRule,
    normalize_text,
)

# ─── normalize_text ──────────────────────────────────────────────────


def test_normalize_lowercases_and_folds_yo():
    assert normalize_text("Всё РАБОТАЕТ") == "все работает"


def test_normalize_unifies_uzbek_apostrophes():
    assert normalize_text("Oʻzgarmadi") == "o'zgarmadi"
    assert normalize_text("to‘lov") == "to'lov"
    assert normalize_text("bo`ldi") == "bo'ldi"


def test_normalize_none():
    assert normalize_text(None) == ""


# ─── PatternRule ─────────────────────────────────────────────────────


def test_rule_search_and_find():
    rule = PatternRule(group="g", name="n", patterns=(r"ошибк", r"сбой"))
    assert rule.search("произошел сбой")
    assert rule.find("ошибка 500") == "ошибк"
    assert rule.find("все хорошо") is None


def test_rule_fullmatch_tolerates_trailing_punctuation():
    rule = PatternRule(group="g", name="n", patterns=(r"спасибо",))
    assert rule.fullmatch("спасибо!!! 🙏")
    assert not rule.fullmatch("спасибо, но не работает")


def test_rule_without_patterns_never_matches():
    rule = PatternRule(group="g", name="n", patterns=())
    assert not rule.search("anything")
    assert not rule.fullmatch("anything")
    assert rule.find("anything") is None


def test_rule_invalid_regex_raises():
    with pytest.raises(ValueError, match="invalid pattern"):
        PatternRule(group="g", name="n", patterns=(r"(unclosed",))


def test_rule_invalid_urgency_raises():
    with pytest.raises(ValueError, match="urgency"):
        PatternRule(group="g", name="n", patterns=("x",), urgency=9)


def test_rule_dict_roundtrip_keeps_metadata():
    rule = PatternRule(group="urgency", name="x", patterns=("авария",), language="ru", urgency=5)
    restored = PatternRule.from_dict(rule.to_dict())
    assert restored == rule
    assert restored.urgency == 5


def test_rule_from_dict_accepts_single_pattern_string():
    rule = PatternRule.from_dict({"group": "g", "name": "n", "patterns": "abc"})
    assert rule.patterns == ("abc",)
    assert rule.language == ANY_LANGUAGE


# ─── PatternCatalog ──────────────────────────────────────────────────


def _catalog() -> PatternCatalog:
    return PatternCatalog(
        rules=(
            PatternRule(group="problem", name="ru", patterns=("сбой",), language="ru"),
            PatternRule(group="problem", name="en", patterns=("broken",), language="en"),
            PatternRule(group="positive", name="any", patterns=("ok",)),
        ),
        source="test",
    )


def test_rules_for_language_filter():
    catalog = _catalog()
    assert len(catalog.rules_for("problem")) == 2
    assert [r.name for r in catalog.rules_for("problem", "ru")] == ["ru"]
    assert [r.name for r in catalog.rules_for("problem", ("ru", "en"))] == ["ru", "en"]
    assert catalog.rules_for("missing") == ()


def test_matches_respects_language():
    catalog = _catalog()
    assert catalog.matches("problem", "сбой", language="ru")
    assert not catalog.matches("problem", "сбой", language="en")


def test_override_replaces_rule():
    catalog = _catalog().with_overrides(
        [PatternRule(group="problem", name="ru", patterns=("авария",), language="ru")]
    )
    assert catalog.source == "database"
    assert catalog.matches("problem", "авария")
    assert not catalog.matches("problem", "сбой")


def test_override_without_patterns_removes_rule():
    catalog = _catalog().with_overrides([PatternRule(group="problem", name="en", patterns=())])
    assert [r.name for r in catalog.rules_for("problem")] == ["ru"]


def test_override_with_new_key_is_appended():
    catalog = _catalog().with_overrides(
        [PatternRule(group="problem", name="uz", patterns=("ishlamayapti",), language="uz_latin")]
    )
    assert [r.name for r in catalog.rules_for("problem")] == ["ru", "en", "uz"]


def test_no_overrides_returns_same_catalog():
    catalog = _catalog()
    assert catalog.with_overrides([]) is catalog


def test_default_catalog_has_core_groups():
    groups = set(DEFAULT_CATALOG.groups)
    for group in ("greeting", "gratitude", "closing", "confirmation", "problem",
                  "error_tokens", "billing_discrepancy", "urgency", "category_billing"):
        assert group in groups


def test_to_dict_groups_rules():
    data = _catalog().to_dict()
    assert set(data) == {"problem", "positive"}
    assert data["problem"][0]["name"] == "ru"
