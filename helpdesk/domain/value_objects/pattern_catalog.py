"""PatternCatalog value object — named, language-tagged regex rules.

The catalog is pure data: every detector in the heuristics engine asks it a
question of the form "does *text* match group G (for language L)?". Rules are
compiled once when the catalog is built; the catalog itself is immutable and
can be shared between concurrent classifications.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

ANY_LANGUAGE = "any"

_APOSTROPHES = str.maketrans({"ʻ": "'", "’": "'", "‘": "'", "`": "'", "ʼ": "'"})


def normalize_text(text: str | None) -> str:
    """Lowercase, fold ё→е and unify Uzbek apostrophe variants."""
    return (text or "").lower().replace("ё", "е").translate(_APOSTROPHES)


@dataclass(frozen=True)
class PatternRule:
    """One named matcher.

    ``patterns`` are regex sources joined with ``|``. ``urgency`` and
    ``auto_reply`` are optional per-rule metadata consumed by the engine.
    A rule with no patterns never matches (used by overrides to switch a
    built-in rule off).
    """

    group: str
    name: str
    patterns: tuple[str, ...]
    language: str = ANY_LANGUAGE
    urgency: int | None = None
    auto_reply: bool = False
    _search: re.Pattern | None = field(default=None, init=False, repr=False, compare=False)
    _full: re.Pattern | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "patterns", tuple(self.patterns))
        if self.urgency is not None and not 0 <= self.urgency <= 5:
            raise ValueError(f"Rule {self.key}: urgency must be within 0..5, got {self.urgency}")
        if not self.patterns:
            return
        body = "|".join(f"(?:{p})" for p in self.patterns)
        try:
            object.__setattr__(self, "_search", re.compile(body, re.IGNORECASE))
            # Whole-message form: trailing punctuation, emoji and spaces are tolerated
            object.__setattr__(self, "_full", re.compile(rf"(?:{body})[^\w]*", re.IGNORECASE))
        except re.error as e:
            raise ValueError(f"Rule {self.key}: invalid pattern: {e}") from e

    @property
    def key(self) -> str:
        return f"{self.group}:{self.name}"

    def search(self, text: str) -> bool:
        return self._search is not None and self._search.search(text) is not None

    def find(self, text: str) -> str | None:
        """Return the first matched fragment, if any."""
        if self._search is None:
            return None
        m = self._search.search(text)
        return m.group(0) if m else None

    def fullmatch(self, text: str) -> bool:
        return self._full is not None and self._full.fullmatch(text) is not None

    def to_dict(self) -> dict:
        data = {
            "group": self.group,
            "name": self.name,
            "patterns": list(self.patterns),
            "language": self.language,
            "auto_reply": self.auto_reply,
        }
        if self.urgency is not None:
            data["urgency"] = self.urgency
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "PatternRule":
        patterns = data.get("patterns") or []
        if isinstance(patterns, str):
            patterns = [patterns]
        urgency = data.get("urgency")
        return cls(
            group=str(data["group"]),
            name=str(data["name"]),
            patterns=tuple(str(p) for p in patterns),
            language=str(data.get("language") or ANY_LANGUAGE),
            urgency=int(urgency) if urgency is not None else None,
            auto_reply=bool(data.get("auto_reply", False)),
        )


@dataclass(frozen=True)
class PatternCatalog:
    """Immutable set of rules indexed by group."""

    rules: tuple[PatternRule, ...]
    source: str = "defaults"
    _index: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        index: dict[str, list[PatternRule]] = {}
        for rule in self.rules:
            index.setdefault(rule.group, []).append(rule)
        object.__setattr__(self, "_index", {g: tuple(r) for g, r in index.items()})

    @property
    def groups(self) -> list[str]:
        return list(self._index)

    def rules_for(
        self, group: str, language: str | Iterable[str] | None = None
    ) -> tuple[PatternRule, ...]:
        rules = self._index.get(group, ())
        if language is None:
            return rules
        languages = {language} if isinstance(language, str) else set(language)
        return tuple(r for r in rules if r.language in languages)

    def matches(
        self, group: str, text: str, language: str | Iterable[str] | None = None
    ) -> bool:
        return any(rule.search(text) for rule in self.rules_for(group, language))

    def matching_rules(self, group: str, text: str) -> list[PatternRule]:
        return [rule for rule in self.rules_for(group) if rule.search(text)]

    def first_full_match(self, group: str, text: str) -> PatternRule | None:
        return next((r for r in self.rules_for(group) if r.fullmatch(text)), None)

    def with_overrides(
        self, overrides: Iterable[PatternRule], source: str = "database"
    ) -> "PatternCatalog":
        """Return a new catalog where *overrides* replace or extend the rules.

        A rule with the same (group, name) replaces the built-in one in place;
        an override with no patterns removes it; unknown keys are appended.
        """
        by_key = {rule.key: rule for rule in overrides}
        if not by_key:
            return self

        merged: list[PatternRule] = []
        for rule in self.rules:
            replacement = by_key.pop(rule.key, None)
            if replacement is None:
                merged.append(rule)
            elif replacement.patterns:
                merged.append(replacement)
        merged.extend(r for r in by_key.values() if r.patterns)
        return PatternCatalog(rules=tuple(merged), source=source)

    def to_dict(self) -> dict[str, list[dict]]:
        return {group: [r.to_dict() for r in rules] for group, rules in self._index.items()}
