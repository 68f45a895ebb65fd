"""Rewrite display glyphs into the grammar's ASCII tokens."""

from __future__ import annotations

# Order matters: the root glyph is only rewritten when it opens a call.
_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("×", "*"),
    ("÷", "/"),
    ("−", "-"),
    ("√(", "sqrt("),
    ("π", "pi"),
)


def normalize(text: str) -> str:
    for glyph, token in _REPLACEMENTS:
        text = text.replace(glyph, token)
    return text


__all__ = ["normalize"]
