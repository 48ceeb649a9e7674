from enum import Enum, IntEnum


class Hand(IntEnum):
    """The three moves. The integer values are part of the commitment encoding."""
    ROCK = 0
    SCISSORS = 1
    PAPER = 2

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    @staticmethod
    def parse(value: 'str | int | Hand') -> 'Hand':
        if isinstance(value, Hand):
            return value
        if isinstance(value, str):
            if value.isdigit():
                return Hand(int(value))
            try:
                return Hand[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Invalid hand: {value}")
        return Hand(value)


class Outcome(Enum):
    OWNER_WINS = 0
    PLAYER_WINS = 1
    TIE = 2


# hand => the hand it beats
BEATS = {
    Hand.ROCK: Hand.SCISSORS,
    Hand.SCISSORS: Hand.PAPER,
    Hand.PAPER: Hand.ROCK,
}


def adjudicate(owner_hand: Hand, player_hand: Hand) -> Outcome:
    if owner_hand == player_hand:
        return Outcome.TIE
    elif BEATS[owner_hand] == player_hand:
        return Outcome.OWNER_WINS
    else:
        return Outcome.PLAYER_WINS
