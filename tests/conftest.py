"""Shared fixtures for gastips tests."""

import json
from pathlib import Path

import pytest

from gastips.catalog.index import Catalog
from gastips.catalog.loader import load_catalog

IMMUTABLE_TITLE = "Use immutable for state variables set once in the constructor"


def _make_record(
    title: str,
    *,
    rationale: str = "Saves gas.",
    inefficient_example: str = "uint256 a = 0;",
    efficient_example: str = "uint256 a;",
) -> dict:
    """Build a raw catalog record."""
    return {
        "title": title,
        "rationale": rationale,
        "inefficient_example": inefficient_example,
        "efficient_example": efficient_example,
    }


def _write_json(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def sample_records() -> list[dict]:
    """Three distinct records in presentation order."""
    return [
        _make_record(
            IMMUTABLE_TITLE,
            rationale="Immutable values live in bytecode, not storage.",
            inefficient_example="address public owner;",
            efficient_example="address public immutable owner;",
        ),
        _make_record(
            "Pack storage variables",
            rationale="Smaller types can share one 32-byte slot.",
            inefficient_example="uint128 a;\nuint256 b;\nuint128 c;",
            efficient_example="uint128 a;\nuint128 c;\nuint256 b;",
        ),
        _make_record(
            "Use custom errors instead of revert strings",
            rationale="Custom errors are cheaper than revert strings.",
            inefficient_example='require(ok, "failed");',
            efficient_example="if (!ok) revert Failed();",
        ),
    ]


@pytest.fixture
def catalog(sample_records: list[dict]) -> Catalog:
    return load_catalog(sample_records)


@pytest.fixture
def duplicated_readme() -> str:
    """Markdown document where the immutable rule appears twice verbatim."""
    section = (
        f"## {{n}}. {IMMUTABLE_TITLE}\n"
        "\n"
        "Immutable values live in bytecode, not storage.\n"
        "\n"
        "```solidity\n"
        "// Less efficient\n"
        "address public owner;\n"
        "\n"
        "// More efficient\n"
        "address public immutable owner;\n"
        "```\n"
        "\n"
    )
    packing = (
        "## 2. Pack storage variables\n"
        "\n"
        "Smaller types can share one 32-byte slot.\n"
        "\n"
        "```solidity\n"
        "// Less efficient\n"
        "uint128 a;\n"
        "uint256 b;\n"
        "uint128 c;\n"
        "// More efficient\n"
        "uint128 a;\n"
        "uint128 c;\n"
        "uint256 b;\n"
        "```\n"
        "\n"
    )
    return (
        "# Solidity Gas Optimization Tips\n\nA collection of tips.\n\n"
        + section.format(n=1)
        + packing
        + section.format(n=3)
    )
