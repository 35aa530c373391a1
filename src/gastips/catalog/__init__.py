"""Gas rule catalog: records, loader, accessor and markdown form."""

from gastips.catalog.config import CatalogConfig, load_catalog_config
from gastips.catalog.index import Catalog
from gastips.catalog.loader import (
    load_bundled_catalog,
    load_catalog,
    load_catalog_file,
    load_configured_catalog,
)
from gastips.catalog.markdown import parse_markdown, render_markdown
from gastips.catalog.models import (
    CatalogSnapshot,
    RuleRecord,
    ValidationError,
    ValidationIssue,
    derive_rule_id,
)

__all__ = [
    "Catalog",
    "CatalogConfig",
    "CatalogSnapshot",
    "RuleRecord",
    "ValidationError",
    "ValidationIssue",
    "derive_rule_id",
    "load_bundled_catalog",
    "load_catalog",
    "load_catalog_config",
    "load_catalog_file",
    "load_configured_catalog",
    "parse_markdown",
    "render_markdown",
]
