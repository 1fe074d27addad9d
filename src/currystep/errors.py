class CurrystepError(Exception):
    """Base class for all currystep errors"""


class ParseError(CurrystepError, ValueError):
    """Raised when a term cannot be read from its surface syntax"""

    def __init__(self, message: str, text: str, position: int):
        self.text = text
        self.position = position
        super().__init__(f"{message} at position {position}\n  {text}\n  {' ' * position}^")


class FreshNamesExhausted(CurrystepError, RuntimeError):
    """Raised when the renaming pass runs out of candidate names. This is an invariant violation."""
