"""
Human-language text detection.

Text made only of symbols, digits, emoji or icon-font glyphs (which fonts
place in the Unicode private use area) is not subject to the contrast
requirement. Anything containing a word of at least two letters is.
"""

import unicodedata


MIN_WORD_LETTERS = 2


def _category(ch: str) -> str:
    return unicodedata.category(ch)


def is_human_language(text: str) -> bool:
    """
    Decide whether text reads as natural language.

    Example:
        is_human_language("Sign in")   # True
        is_human_language("\\ue87d")    # False (icon font glyph)
        is_human_language("★ 4.5")     # False
    """
    chars = [ch for ch in text if not ch.isspace()]
    if not chars:
        return False

    private_use = sum(1 for ch in chars if _category(ch) == "Co")
    if private_use * 2 >= len(chars):
        return False

    run = 0
    for ch in text:
        if _category(ch).startswith("L"):
            run += 1
            if run >= MIN_WORD_LETTERS:
                return True
        else:
            run = 0
    return False
