from typing import Iterator, Union

ALPHABET = "abcdefghijklmnopqrstuvwxyz"

_ord_dict = {c: i for i, c in enumerate(ALPHABET)}


class Letter(int):
    """A lowercase letter stored as its alphabet index (a=0 ... z=25)."""

    def __new__(cls, index: int):
        if not 0 <= index < len(ALPHABET):
            raise ValueError(f"Letter index {index} out of bounds.")
        return super().__new__(cls, index)

    @classmethod
    def from_char(cls, char: str) -> "Letter":
        try:
            return cls(_ord_dict[char])
        except KeyError:
            raise ValueError(f"Letter {char!r} out of bounds.") from None

    @property
    def index(self) -> int:
        return int(self)

    @property
    def char(self) -> str:
        return ALPHABET[self]

    def __str__(self) -> str:
        return self.char

    def __repr__(self) -> str:
        return f"Letter({self.char!r})"


class Word:
    """
    An immutable sequence of letters.

    Words compare and hash by value, so they can be used as dict keys and set members.
    A word also compares equal to its text, which keeps lookups in sets of plain strings cheap.
    """

    __slots__ = ("_letters", "_text")

    def __init__(self, text: Union[str, "Word"]):
        if isinstance(text, Word):
            self._letters = text._letters
            self._text = text._text
            return
        if not text:
            raise ValueError("A word needs at least one letter.")
        self._letters = tuple(Letter.from_char(c) for c in text)
        self._text = text

    @classmethod
    def from_str(cls, text: str) -> "Word":
        return cls(text)

    @property
    def letters(self) -> tuple[Letter, ...]:
        return self._letters

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Word({self._text!r})"

    def __len__(self) -> int:
        return len(self._letters)

    def __getitem__(self, i: int) -> Letter:
        return self._letters[i]

    def __iter__(self) -> Iterator[Letter]:
        return iter(self._letters)

    def __eq__(self, other) -> bool:
        if isinstance(other, Word):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._text)

    def __lt__(self, other: "Word") -> bool:
        return self._text < str(other)

    def __setattr__(self, name, value):
        if hasattr(self, "_text"):
            raise AttributeError("Word is immutable.")
        super().__setattr__(name, value)
