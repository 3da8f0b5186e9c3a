"""
Text normalization for line-item matching.
Tokenizes claim text and expands common roofing/construction abbreviations.
"""

import re

NON_ALPHANUMERIC = re.compile(r"[^a-z0-9\s]")
WHITESPACE = re.compile(r"\s+")

MIN_TOKEN_LENGTH = 2

STOP_WORDS: frozenset[str] = frozenset(
    {"the", "and", "for", "per", "with", "from", "this", "that", "are", "was", "were"}
)

# Trade abbreviations as they appear in estimates. Expansion is additive:
# the abbreviation itself stays in the token list.
TRADE_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "sq": ("square", "squares"),
    "lf": ("linear", "foot", "feet"),
    "sf": ("square", "foot", "feet"),
    "hv": ("hvac", "heating", "ventilation"),
    "arch": ("architectural", "architecture"),
    "comp": ("composition", "composite"),
    "asph": ("asphalt",),
    "shgl": ("shingle", "shingles"),
    "ins": ("install", "installation", "insurance"),
    "rem": ("remove", "removal"),
    "rep": ("replace", "replacement"),
    "flsh": ("flash", "flashing"),
    "mod": ("modifier", "modification"),
}


def tokenize(text: str) -> list[str]:
    """Lowercase, strip punctuation and drop short tokens and stop-words."""
    if not isinstance(text, str):
        return []

    cleaned = NON_ALPHANUMERIC.sub(" ", text.lower())
    return [
        token
        for token in WHITESPACE.split(cleaned)
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def normalize_for_matching(text: str) -> list[str]:
    """
    Normalize free text into match tokens.

    Each token is followed by its trade-abbreviation expansions, so
    "Tear Off SQ" becomes ["tear", "off", "sq", "square", "squares"].

    Args:
        text: Line-item description, pattern description or gap phrase

    Returns:
        Ordered list of tokens (empty for blank or non-string input)
    """
    expanded: list[str] = []
    for token in tokenize(text):
        expanded.append(token)
        expanded.extend(TRADE_ABBREVIATIONS.get(token, ()))
    return expanded


def canonical_name(value: str) -> str:
    """Canonical form of a carrier or item name for identity comparisons."""
    return " ".join(value.split()).lower()


def canonical_key(carrier: str, item: str) -> tuple[str, str]:
    """Identity key of a pattern: case-insensitive (carrier, item) pair."""
    return canonical_name(carrier), canonical_name(item)
