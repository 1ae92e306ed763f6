"""Turn English text upside down."""

from __future__ import annotations

CHAR_MAP: dict[str, str] = {
    " ": " ",
    "a": "ɐ", "b": "q", "c": "ɔ", "d": "p", "e": "ǝ", "f": "ɟ", "g": "ƃ",
    "h": "ɥ", "i": "ᴉ", "j": "ɾ", "k": "ʞ", "l": "l", "m": "ɯ", "n": "u",
    "o": "o", "p": "d", "q": "b", "r": "ɹ", "s": "s", "t": "ʇ", "u": "n",
    "v": "ʌ", "w": "ʍ", "x": "x", "y": "ʎ", "z": "z",
    "A": "∀", "B": "ᗺ", "C": "Ɔ", "D": "ᗡ", "E": "Ǝ", "F": "Ⅎ", "G": "⅁",
    "H": "H", "I": "I", "J": "ſ", "K": "ʞ", "L": "˥", "M": "W", "N": "N",
    "O": "O", "P": "Ԁ", "Q": "Ò", "R": "ᴚ", "S": "S", "T": "⏊", "U": "∩",
    "V": "Λ", "W": "M", "X": "X", "Y": "⅄", "Z": "Z",
}


def flip(text: str) -> str:
    """Reverse the text and replace each letter with its upside-down form."""
    flipped = []
    for char in reversed(text):
        if char in CHAR_MAP:
            flipped.append(CHAR_MAP[char])
        elif char.isspace():
            flipped.append(char)
        else:
            raise ValueError(f"only English letters and spaces can be flipped: {char!r}")
    return "".join(flipped)