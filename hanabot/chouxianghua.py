"""Turn Chinese text into "abstract speech" made of emoji."""

from __future__ import annotations

from collections.abc import Mapping

__all__ = ["AbstractDictionary", "translate"]


class AbstractDictionary:
    """Pinyin of characters and emoji of pronunciations."""

    def __init__(self, pinyin: Mapping[str, str], emoji: Mapping[str, str]) -> None:
        self._pinyin = dict(pinyin)
        self._emoji = dict(emoji)

    def pinyin_of(self, word: str) -> str:
        """The pronunciation of a character, or an empty string."""
        return self._pinyin.get(word, "")

    def emoji_of(self, pronunciation: str) -> str:
        """The emoji for a pronunciation, or an empty string."""
        return self._emoji.get(pronunciation, "")


def translate(text: str, dictionary: AbstractDictionary) -> str:
    """Replace character pairs, then single characters, with their emoji."""
    out = []
    position = 0
    while position < len(text):
        char = text[position]
        if position + 1 < len(text):
            pair = dictionary.pinyin_of(char) + dictionary.pinyin_of(text[position + 1])
            emoji = dictionary.emoji_of(pair)
            if emoji:
                out.append(emoji)
                position += 2
                continue
        emoji = dictionary.emoji_of(dictionary.pinyin_of(char))
        out.append(emoji or char)
        position += 1
    return "".join(out)