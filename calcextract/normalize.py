"""
String normalization for names and paths pulled from CSV cells.

Rules are literal substring replacements (no regex). Every occurrence of a
rule's pattern is replaced. Rules are applied one after another in mapping
order; rule sets whose patterns overlap give order-dependent results and are
the caller's problem.
"""

from __future__ import annotations

from typing import Optional

from .rules import ReplacementRules


def normalize(text: Optional[str], rules: Optional[ReplacementRules] = None) -> str:
    if not text:
        return text or ""
    if not rules:
        return text

    for pattern, replacement in rules.items():
        # str.replace("") would insert between every character
        if not pattern:
            continue
        text = text.replace(pattern, replacement)
    return text
