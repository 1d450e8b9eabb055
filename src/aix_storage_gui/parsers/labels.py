"""Helpers shared by the command output parsers.

AIX block reports (``lsvg <vg>``, ``lspv <pv>``, ``lslv <lv>``) print two
``LABEL: value`` pairs per line. ``LabelMatcher`` finds every known label on a
line and cuts each value off where the next label starts, so a short label
such as ``LPs:`` never swallows ``MAX LPs:`` and ``MOUNT POINT:`` stops before
``LABEL:``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

_INT_RX = re.compile(r"-?\d+")
_FLOAT_RX = re.compile(r"-?\d+(?:\.\d+)?")


def to_int(value: str) -> int:
    m = _INT_RX.search(value or "")
    return int(m.group(0)) if m else 0


def to_float(value: str) -> float:
    m = _FLOAT_RX.search(value or "")
    return float(m.group(0)) if m else 0.0


def first_token(value: str) -> str:
    parts = (value or "").split()
    return parts[0] if parts else ""


def text(value: str) -> str:
    return (value or "").strip()


class LabelMatcher:
    def __init__(self, labels: Iterable[str]) -> None:
        ordered = sorted(set(labels), key=len, reverse=True)
        alternation = "|".join(re.escape(label) for label in ordered)
        self._rx = re.compile(rf"(?:^|(?<=\s))({alternation})")

    def scan(self, output: str) -> dict[str, str]:
        """Return label -> raw value for the first occurrence of each label."""
        values: dict[str, str] = {}
        for line in output.splitlines():
            hits = list(self._rx.finditer(line))
            for i, m in enumerate(hits):
                end = hits[i + 1].start() if i + 1 < len(hits) else len(line)
                values.setdefault(m.group(1), line[m.end():end].strip())
        return values


@dataclass(frozen=True)
class FieldRule:
    field: str
    convert: Callable[[str], Any]


def apply_rules(values: Mapping[str, str], rules: Mapping[str, FieldRule]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for label, rule in rules.items():
        if label in values:
            out[rule.field] = rule.convert(values[label])
    return out


def data_lines(output: str, skip: int = 0) -> list[list[str]]:
    rows: list[list[str]] = []
    for i, line in enumerate(output.splitlines()):
        if i < skip:
            continue
        fields = line.split()
        if fields:
            rows.append(fields)
    return rows
