"""Pydantic models for the gas rule catalog."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

_NUMBERING = re.compile(r"^\s*\d+[.)]\s+")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


def strip_numbering(title: str) -> str:
    """Drop a leading list number such as ``"3. "`` from a heading."""
    return _NUMBERING.sub("", title).strip()


def derive_rule_id(title: str) -> str:
    """Stable identifier derived from a rule title."""
    return _NON_SLUG.sub("-", strip_numbering(title).lower()).strip("-")


def normalize_title(title: str) -> str:
    """Comparison key used for the unique-title check."""
    return " ".join(strip_numbering(title).split()).casefold()


class RuleRecord(BaseModel):
    """One documented gas-optimization tip."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    rationale: str
    inefficient_example: str = ""
    efficient_example: str = ""


class CatalogSnapshot(BaseModel):
    rules: list[RuleRecord] = Field(default_factory=list)
    content_hashes: dict[str, str] = Field(default_factory=dict)
    snapshot_hash: str = ""


class ValidationIssue(BaseModel):
    """A single problem found while loading a catalog source."""

    index: int  # position in the source, 0-based
    field: str  # "title" | "rationale" | "id" | ...
    message: str


class ValidationError(ValueError):
    """Raised at load time when a catalog source is malformed or has duplicates."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(_summarize(issues))

    @classmethod
    def for_source(cls, message: str) -> ValidationError:
        """Error that concerns the source as a whole rather than one record."""
        return cls([ValidationIssue(index=-1, field="source", message=message)])


def _summarize(issues: list[ValidationIssue]) -> str:
    if not issues:
        return "invalid catalog"
    parts = []
    for issue in issues:
        if issue.index < 0:
            parts.append(issue.message)
        else:
            parts.append(f"rule #{issue.index} {issue.field}: {issue.message}")
    return "; ".join(parts)
