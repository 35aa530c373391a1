"""Catalog: read-only, ordered access to loaded rule records."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Iterator

from gastips.catalog.models import (
    CatalogSnapshot,
    RuleRecord,
    ValidationError,
    ValidationIssue,
)


class Catalog:
    """Immutable sequence of RuleRecord in presentation order.

    Build one with ``load_catalog`` so records are validated; the constructor
    only guards the id index.
    """

    def __init__(self, rules: Iterable[RuleRecord]) -> None:
        self._rules: tuple[RuleRecord, ...] = tuple(rules)
        self._by_id: dict[str, RuleRecord] = {}
        issues: list[ValidationIssue] = []
        for i, rule in enumerate(self._rules):
            if rule.id in self._by_id:
                issues.append(
                    ValidationIssue(index=i, field="id", message=f"duplicate id '{rule.id}'")
                )
                continue
            self._by_id[rule.id] = rule
        if issues:
            raise ValidationError(issues)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RuleRecord]:
        return iter(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id

    def __getitem__(self, rule_id: str) -> RuleRecord:
        return self._by_id[rule_id]

    def __repr__(self) -> str:
        return f"Catalog({len(self._rules)} rules)"

    def get(self, rule_id: str) -> RuleRecord | None:
        return self._by_id.get(rule_id)

    def all_records(self) -> list[RuleRecord]:
        return list(self._rules)

    def ids(self) -> list[str]:
        return [r.id for r in self._rules]

    def search(self, query: str) -> list[RuleRecord]:
        """Case-insensitive substring match on title and rationale."""
        needle = query.strip().casefold()
        if not needle:
            return self.all_records()
        return [
            r
            for r in self._rules
            if needle in r.title.casefold() or needle in r.rationale.casefold()
        ]

    def snapshot(self) -> CatalogSnapshot:
        """Content hashes per rule plus an order-sensitive snapshot hash."""
        hashes = {r.id: _hash(json.dumps(r.model_dump(), sort_keys=True)) for r in self._rules}
        snapshot_hash = _hash("".join(hashes[r.id] for r in self._rules))
        return CatalogSnapshot(
            rules=list(self._rules),
            content_hashes=hashes,
            snapshot_hash=snapshot_hash,
        )


def _hash(content: str) -> str:
    return hashlib.sha256(content.encode()).hexdigest()
