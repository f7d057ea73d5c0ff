from __future__ import annotations


class CoordinatesError(ValueError):
    """Coordinates do not lie on the puzzle board (or a move would leave it)."""


# ---------- Creation ----------
class PuzzleStateCreationError(ValueError):
    """Cells passed to PuzzleState do not describe a valid board."""


class BoardSizeError(PuzzleStateCreationError):
    pass


class NotPermutationError(PuzzleStateCreationError):
    pass


class TwoBlanksError(PuzzleStateCreationError):
    pass


# ---------- Parsing ----------
class PuzzleStateParseError(ValueError):
    """Text could not be read as `[1, 2, ..., ]`."""


class NoBracketsError(PuzzleStateParseError):
    pass


class NotEnoughNumbersError(PuzzleStateParseError):
    pass


class TooManyNumbersError(PuzzleStateParseError):
    pass


class NumberParseError(PuzzleStateParseError):
    pass
