"""
Utilities for rendering symbols as displayable strings.
"""

import unicodedata


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    cleaned = []
    for c in s:
        # control category codes vary: Cc, Cf, Cn etc.
        # so check via first character
        if unicodedata.category(c)[0] != "C":
            cleaned.append(c)
        else:
            cleaned.append(f"\\u{ord(c):04x}")
    return "".join(cleaned)


def render_symbol(symbol: str) -> str:
    """Render a symbol for the .vocab file, escaping control characters."""
    return _escape_ctrl_chars(symbol)


def render_symbols(symbols: list[str]) -> str:
    """Render a symbol sequence as ``[s0][s1]...``."""
    return "".join(f"[{render_symbol(s)}]" for s in symbols)
