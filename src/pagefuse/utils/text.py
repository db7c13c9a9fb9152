"""
Plain-ASCII normalisation of typographic punctuation.
"""

from __future__ import annotations

# Typographic punctuation confuses downstream prompt parsing; map it to ASCII.
_QUOTE_TABLE = str.maketrans(
    {
        "‘": "'",
        "’": "'",
        "‚": "'",
        "‛": "'",
        "“": '"',
        "”": '"',
        "„": '"',
        "‟": '"',
        "«": '"',
        "»": '"',
        "‹": "'",
        "›": "'",
        "–": "-",
        "—": "-",
        "…": "...",
        " ": " ",
    }
)


def sanitize_quotes(text: str | None) -> str:
    """Replace smart quotes, guillemets, dashes, ellipses and NBSP with ASCII."""
    if not text:
        return ""
    return text.translate(_QUOTE_TABLE)
