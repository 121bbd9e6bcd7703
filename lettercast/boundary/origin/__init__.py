"""Origin file server boundary."""

from lettercast.boundary.origin.letter_source import LetterSource

__all__ = ["LetterSource"]
