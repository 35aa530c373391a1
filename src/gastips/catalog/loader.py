"""Catalog loader: build a validated Catalog from records, files, or package data."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from importlib import resources
from pathlib import Path

from gastips.catalog.config import CatalogConfig
from gastips.catalog.index import Catalog
from gastips.catalog.markdown import parse_markdown
from gastips.catalog.models import (
    RuleRecord,
    ValidationError,
    ValidationIssue,
    derive_rule_id,
    normalize_title,
)

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = "gas-tips.json"

_REQUIRED_FIELDS = ("title", "rationale")
_EXAMPLE_FIELDS = ("inefficient_example", "efficient_example")


def load_catalog(
    records: Iterable[Mapping[str, object]],
    *,
    strict: bool = True,
) -> Catalog:
    """Validate raw records and build a Catalog in source order.

    Every record needs a non-empty title and rationale. Titles must be unique
    (compared case-insensitively, whitespace-normalized) and must derive
    distinct ids. All problems are collected before raising ValidationError.

    With strict=False a repeated title is logged and the later copy dropped.
    """
    issues: list[ValidationIssue] = []
    rules: list[RuleRecord] = []
    seen_titles: dict[str, int] = {}
    seen_ids: dict[str, int] = {}

    for index, raw in enumerate(records):
        if not isinstance(raw, Mapping):
            issues.append(
                ValidationIssue(index=index, field="record", message="expected a mapping")
            )
            continue

        record_issues = _check_fields(index, raw)
        if record_issues:
            issues.extend(record_issues)
            continue

        title = str(raw["title"]).strip()
        rule_id = derive_rule_id(title)
        if not rule_id:
            issues.append(
                ValidationIssue(
                    index=index, field="title", message=f"'{title}' does not yield an id"
                )
            )
            continue

        explicit_id = raw.get("id")
        if explicit_id is not None and explicit_id != rule_id:
            issues.append(
                ValidationIssue(
                    index=index,
                    field="id",
                    message=f"id '{explicit_id}' does not match title-derived id '{rule_id}'",
                )
            )
            continue

        key = normalize_title(title)
        if key in seen_titles or rule_id in seen_ids:
            first = seen_titles.get(key, seen_ids.get(rule_id))
            kind = "title" if key in seen_titles else "id"
            message = f"duplicate {kind} '{title}' (first defined at #{first})"
            if strict:
                issues.append(ValidationIssue(index=index, field=kind, message=message))
            else:
                logger.warning(f"Skipping rule #{index}: {message}")
            continue

        seen_titles[key] = index
        seen_ids[rule_id] = index
        rules.append(
            RuleRecord(
                id=rule_id,
                title=title,
                rationale=str(raw["rationale"]).strip(),
                inefficient_example=_example(raw, "inefficient_example"),
                efficient_example=_example(raw, "efficient_example"),
            )
        )

    if issues:
        raise ValidationError(issues)

    logger.debug(f"Loaded catalog with {len(rules)} rules")
    return Catalog(rules)


def load_catalog_file(path: Path, *, strict: bool = True) -> Catalog:
    """Load a catalog from a .json or .md/.markdown document."""
    suffix = path.suffix.lower()
    if suffix not in (".json", ".md", ".markdown"):
        raise ValidationError.for_source(f"unsupported catalog format: {path.name}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError.for_source(f"cannot read {path}: {e}") from e

    if suffix == ".json":
        records = _records_from_json(text, path)
    else:
        records = parse_markdown(text)

    logger.info(f"Loading catalog from {path} ({len(records)} records)")
    return load_catalog(records, strict=strict)


def load_bundled_catalog() -> Catalog:
    """Load the gas tips shipped with the package."""
    pkg = resources.files("gastips.catalog")
    data = json.loads(pkg.joinpath(BUNDLED_CATALOG).read_text(encoding="utf-8"))
    return load_catalog(data["rules"])


def load_configured_catalog(config: CatalogConfig) -> Catalog:
    """Load the catalog named by config, falling back to the bundled one."""
    if config.source:
        return load_catalog_file(Path(config.source), strict=config.strict)
    return load_bundled_catalog()


def _check_fields(index: int, raw: Mapping[str, object]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for name in _REQUIRED_FIELDS:
        value = raw.get(name)
        if value is None:
            issues.append(ValidationIssue(index=index, field=name, message="missing"))
        elif not isinstance(value, str):
            issues.append(ValidationIssue(index=index, field=name, message="must be a string"))
        elif not value.strip():
            issues.append(ValidationIssue(index=index, field=name, message="must not be empty"))
    for name in _EXAMPLE_FIELDS:
        value = raw.get(name)
        if value is not None and not isinstance(value, str):
            issues.append(ValidationIssue(index=index, field=name, message="must be a string"))
    return issues


def _example(raw: Mapping[str, object], name: str) -> str:
    value = raw.get(name)
    if value is None:
        return ""
    # Keep indentation, drop surrounding blank lines
    return str(value).strip("\n").rstrip()


def _records_from_json(text: str, path: Path) -> list[Mapping[str, object]]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError.for_source(f"invalid JSON in {path.name}: {e}") from e

    if isinstance(data, dict):
        data = data.get("rules")
    if not isinstance(data, list):
        raise ValidationError.for_source(
            f"{path.name}: expected a list of rules or an object with a 'rules' list"
        )
    return data
