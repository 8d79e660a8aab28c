"""ManagePatternsUseCase — the editable pattern override layer.

Stored overrides are merged over the built-in catalog: an override with the
same group/name replaces the default rule, an override without patterns
disables it, anything else is appended.
"""

from __future__ import annotations

import logging

from helpdesk.application.ports.pattern_repo import PatternRepository
from helpdesk.domain.value_objects.default_patterns import DEFAULT_CATALOG
from helpdesk.domain.value_objects.pattern_catalog import PatternCatalog, PatternRule

logger = logging.getLogger(__name__)


class ManagePatternsUseCase:
    def __init__(self, pattern_repo: PatternRepository, base: PatternCatalog = DEFAULT_CATALOG):
        self._patterns = pattern_repo
        self._base = base

    async def load_catalog(self) -> PatternCatalog:
        """Built-in catalog with stored overrides; the defaults if the store fails."""
        try:
            overrides = await self._patterns.list_active()
        except Exception:
            logger.exception("Could not load pattern overrides, using built-in catalog")
            return self._base

        if not overrides:
            return self._base
        catalog = self._base.with_overrides(overrides)
        logger.info("Loaded %d pattern overrides (%d rules total)", len(overrides), len(catalog.rules))
        return catalog

    async def list_overrides(self) -> list[PatternRule]:
        return await self._patterns.list_active()

    async def save(self, rule: PatternRule) -> PatternRule:
        saved = await self._patterns.upsert(rule)
        logger.info("Saved pattern override %s", saved.key)
        return saved

    async def remove(self, group: str, name: str) -> bool:
        removed = await self._patterns.deactivate(group, name)
        if removed:
            logger.info("Removed pattern override %s:%s", group, name)
        return removed
