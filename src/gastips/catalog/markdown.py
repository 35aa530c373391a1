"""Read and render the markdown form of the catalog.

Document shape::

    # Solidity Gas Optimization Tips

    ## 1. Use immutable for constructor-set values

    Rationale paragraph(s).

    ```solidity
    // Less efficient
    uint256 public owner;
    ```

    ```solidity
    // More efficient
    uint256 public immutable owner;
    ```

A rule may also carry a single fenced block holding both snippets, split by
the ``// Less efficient`` and ``// More efficient`` comments.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from gastips.catalog.models import RuleRecord, strip_numbering

DEFAULT_TITLE = "Solidity Gas Optimization Tips"

_INEFFICIENT_MARKER = re.compile(r"^\s*//\s*(?:less\s+efficient|inefficient|bad)\b", re.IGNORECASE)
_EFFICIENT_MARKER = re.compile(r"^\s*//\s*(?:more\s+efficient|efficient|good)\b", re.IGNORECASE)
# "**Less efficient:**" style label right above the first code block
_LABEL = re.compile(r"^[*_\s]*(?:less|more)\s+efficient\s*:?[*_\s]*:?\s*$", re.IGNORECASE)


def parse_markdown(text: str) -> list[dict[str, str]]:
    """Split a markdown document into raw rule records.

    Nothing is validated here; feed the result to ``load_catalog``.
    """
    records: list[dict[str, str]] = []
    section: _Section | None = None
    fence: list[str] | None = None

    for line in text.splitlines():
        stripped = line.strip()

        if fence is not None:
            if stripped.startswith("```"):
                if section is not None:
                    section.blocks.append("\n".join(fence))
                fence = None
            else:
                fence.append(line)
            continue

        if stripped.startswith("```"):
            if section is not None and not section.blocks:
                section.drop_trailing_label()
            fence = []
        elif line.startswith("## "):
            if section is not None:
                records.append(section.to_record())
            section = _Section(strip_numbering(line[3:]))
        elif line.startswith("# "):
            if section is not None:
                records.append(section.to_record())
            section = None
        elif section is not None and not section.blocks:
            section.prose.append(line)

    # Unterminated fence runs to end of document
    if fence is not None and section is not None:
        section.blocks.append("\n".join(fence))
    if section is not None:
        records.append(section.to_record())
    return records


def render_markdown(rules: Iterable[RuleRecord], *, title: str = DEFAULT_TITLE) -> str:
    """Render rules as a numbered markdown document."""
    lines = [f"# {title}", ""]
    for number, rule in enumerate(rules, 1):
        lines += [f"## {number}. {rule.title}", "", rule.rationale, ""]
        # Both blocks or none, so the reader can rely on block position
        if rule.inefficient_example or rule.efficient_example:
            lines += _code_block("// Less efficient", rule.inefficient_example)
            lines += _code_block("// More efficient", rule.efficient_example)
    return "\n".join(lines).rstrip() + "\n"


class _Section:
    def __init__(self, title: str) -> None:
        self.title = title
        self.prose: list[str] = []
        self.blocks: list[str] = []

    def drop_trailing_label(self) -> None:
        while self.prose and not self.prose[-1].strip():
            self.prose.pop()
        if self.prose and _LABEL.match(self.prose[-1].strip()):
            self.prose.pop()

    def to_record(self) -> dict[str, str]:
        inefficient, efficient = _split_examples(self.blocks)
        return {
            "title": self.title,
            "rationale": "\n".join(self.prose).strip(),
            "inefficient_example": inefficient,
            "efficient_example": efficient,
        }


def _split_examples(blocks: list[str]) -> tuple[str, str]:
    if not blocks:
        return "", ""
    if len(blocks) >= 2:
        return _drop_marker(blocks[0]), _drop_marker(blocks[1])

    lines = blocks[0].splitlines()
    efficient_at = next((i for i, ln in enumerate(lines) if _EFFICIENT_MARKER.match(ln)), None)
    if efficient_at is not None:
        before = [ln for ln in lines[:efficient_at] if not _INEFFICIENT_MARKER.match(ln)]
        return _join(before), _join(lines[efficient_at + 1 :])

    inefficient_at = next((i for i, ln in enumerate(lines) if _INEFFICIENT_MARKER.match(ln)), None)
    if inefficient_at is not None:
        return _join(lines[inefficient_at + 1 :]), ""

    # Unlabelled single snippet shows the recommended pattern
    return "", _join(lines)


def _drop_marker(block: str) -> str:
    lines = block.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if lines and (_INEFFICIENT_MARKER.match(lines[0]) or _EFFICIENT_MARKER.match(lines[0])):
        lines.pop(0)
    return _join(lines)


def _join(lines: list[str]) -> str:
    return "\n".join(lines).strip("\n").rstrip()


def _code_block(marker: str, code: str) -> list[str]:
    return ["```solidity", marker, code, "```", ""]
