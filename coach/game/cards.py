"""Card, hand and deck representation utilities."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Union

from treys import Card as TreysCard


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits, indexed in code order 'shdc'."""
    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3


RANK_CHARS = "23456789TJQKA"
SUIT_CHARS = "shdc"

# Mapping for string conversion
RANK_STR = {rank: char for rank, char in zip(Rank, RANK_CHARS)}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {suit: char for suit, char in zip(Suit, SUIT_CHARS)}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def code(self) -> str:
        """Two-character interchange code, e.g. 'As' or 'Td'."""
        return str(self)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '2c'."""
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return cls(rank=STR_RANK[rank_char], suit=STR_SUIT[suit_char])

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))


CardLike = Union[Card, str]


def parse(code: str) -> Card:
    """Parse a two-character card code."""
    return Card.from_string(code)


def parse_cards(text: str) -> list[Card]:
    """
    Parse a run of card codes.

    Accepts compact ('AsKh') or separated ('As Kh', 'As,Kh') forms.
    """
    compact = text.replace(",", " ").replace(" ", "")
    if len(compact) % 2:
        raise ValueError(f"Invalid card list: {text!r}")
    return [Card.from_string(compact[i:i + 2]) for i in range(0, len(compact), 2)]


def full_deck() -> list[Card]:
    """All 52 cards, ordered by rank then suit."""
    return [Card(rank, suit) for rank in Rank for suit in Suit]


def remove_used(deck: Iterable[Card], used: Iterable[CardLike]) -> list[Card]:
    """Return the cards of ``deck`` whose code is not in ``used``."""
    used_codes = {str(c) for c in used}
    return [card for card in deck if str(card) not in used_codes]


# Order used for canonical hand names and the 13x13 grid
RANKS_DESC = RANK_CHARS[::-1]

# Specific two-card combos behind each canonical hand shape
COMBOS_PAIR = 6
COMBOS_SUITED = 4
COMBOS_OFFSUIT = 12
TOTAL_COMBOS = 1326


@dataclass
class Hand:
    """
    Two hole cards, stored high card first.

    Canonical names follow the usual grid notation: 'QQ' for pairs,
    'AKs' suited, '72o' offsuit.
    """
    card1: Card
    card2: Card

    def __post_init__(self):
        if self.card1.rank < self.card2.rank:
            self.card1, self.card2 = self.card2, self.card1

    @property
    def is_pair(self) -> bool:
        return self.card1.rank == self.card2.rank

    @property
    def is_suited(self) -> bool:
        return self.card1.suit == self.card2.suit

    @property
    def cards(self) -> list[Card]:
        return [self.card1, self.card2]

    @property
    def canonical(self) -> str:
        ranks = RANK_STR[self.card1.rank] + RANK_STR[self.card2.rank]
        if self.is_pair:
            return ranks
        return ranks + ("s" if self.is_suited else "o")

    @property
    def combos(self) -> int:
        """Number of specific deals sharing this hand's canonical name."""
        if self.is_pair:
            return COMBOS_PAIR
        return COMBOS_SUITED if self.is_suited else COMBOS_OFFSUIT

    def __str__(self) -> str:
        return f"{self.card1}{self.card2}"

    def __repr__(self) -> str:
        return f"Hand({self.card1}, {self.card2})"

    @classmethod
    def from_string(cls, s: str) -> "Hand":
        """
        Parse 'AsKh' (exact cards) or a canonical name ('AA', 'AKs', 'AKo').

        Canonical names get representative suits: spades for the first
        card, spades or hearts for the second.
        """
        if len(s) == 4:
            return cls(*parse_cards(s))
        if len(s) not in (2, 3):
            raise ValueError(f"Invalid hand string: {s}")

        try:
            hi, lo = STR_RANK[s[0].upper()], STR_RANK[s[1].upper()]
        except KeyError:
            raise ValueError(f"Invalid hand string: {s}") from None

        if len(s) == 2:
            if hi != lo:
                raise ValueError(f"Two-character hand must be a pair: {s}")
            return cls(Card(hi, Suit.SPADES), Card(lo, Suit.HEARTS))

        kind = s[2].lower()
        if kind not in ("s", "o") or hi == lo:
            raise ValueError(f"Invalid hand string: {s}")
        second_suit = Suit.SPADES if kind == "s" else Suit.HEARTS
        return cls(Card(hi, Suit.SPADES), Card(lo, second_suit))


def get_all_hands() -> list[str]:
    """The 169 canonical starting hands: pairs first, then suited/offsuit."""
    pairs = [r + r for r in RANKS_DESC]
    unpaired = [
        f"{hi}{lo}{kind}"
        for i, hi in enumerate(RANKS_DESC)
        for lo in RANKS_DESC[i + 1:]
        for kind in "so"
    ]
    return pairs + unpaired
