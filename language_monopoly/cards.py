"""
Fate and supply card decks.

Libraries draw from the fate deck, canteens from the supply deck. Deck
contents can be replaced by passing custom card lists to `create_game`.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class DeckType(Enum):
    """Card decks a special event can draw from."""

    FATE = "fate"
    SUPPLY = "supply"


class CardType(Enum):
    """Types of card effects."""

    COLLECT = "collect"
    PAY = "pay"
    GRANT_UPGRADE_CREDIT = "grant_upgrade_credit"


@dataclass(frozen=True)
class Card:
    """Represents a fate or supply card."""

    description: str
    card_type: CardType
    value: int = 0

    def __repr__(self) -> str:
        return f"Card('{self.description}')"


class Deck:
    """A deck of cards that can be shuffled and drawn from."""

    def __init__(self, deck_type: DeckType, cards: List[Card], rng: random.Random):
        if not cards:
            raise ValueError(f"{deck_type.value} deck needs at least one card")
        self.deck_type = deck_type
        self.cards = list(cards)
        self.rng = rng
        self.discard_pile: List[Card] = []
        self.shuffle()

    def shuffle(self) -> None:
        """Shuffle the deck."""
        self.rng.shuffle(self.cards)

    def draw(self) -> Card:
        """
        Draw a card from the deck.
        If deck is empty, shuffle the discard pile back in.
        """
        if not self.cards:
            self.cards = self.discard_pile
            self.discard_pile = []
            self.shuffle()
        return self.cards.pop(0)

    def discard(self, card: Card) -> None:
        """Put a played card on the discard pile."""
        self.discard_pile.append(card)


def default_fate_cards() -> List[Card]:
    return [
        Card("Your essay wins the district prize. Collect 100.", CardType.COLLECT, 100),
        Card("A kind reviewer grants you a free building permit.", CardType.GRANT_UPGRADE_CREDIT, 1),
        Card("Overdue library books. Pay 20.", CardType.PAY, 20),
        Card("Your translation is published. Collect 60.", CardType.COLLECT, 60),
        Card("The academy council rewards your diligence.", CardType.GRANT_UPGRADE_CREDIT, 1),
        Card("Replace a lost dictionary. Pay 40.", CardType.PAY, 40),
    ]


def default_supply_cards() -> List[Card]:
    return [
        Card("Extra rations. Collect 50.", CardType.COLLECT, 50),
        Card("Volunteer in the kitchen and earn a building voucher.", CardType.GRANT_UPGRADE_CREDIT, 1),
        Card("Canteen tab comes due. Pay 30.", CardType.PAY, 30),
        Card("Bulk tea sale. Collect 80.", CardType.COLLECT, 80),
        Card("Broken teapot. Pay 15.", CardType.PAY, 15),
    ]


def create_decks(
    rng: random.Random,
    fate_cards: Optional[List[Card]] = None,
    supply_cards: Optional[List[Card]] = None,
) -> Dict[DeckType, Deck]:
    """Create both decks, shuffled with the game RNG. `None` selects the default cards."""
    if fate_cards is None:
        fate_cards = default_fate_cards()
    if supply_cards is None:
        supply_cards = default_supply_cards()
    return {
        DeckType.FATE: Deck(DeckType.FATE, fate_cards, rng),
        DeckType.SUPPLY: Deck(DeckType.SUPPLY, supply_cards, rng),
    }
