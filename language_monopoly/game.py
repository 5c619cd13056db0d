"""
Main game engine and state management.

Every mutating method validates first and raises an ActionRejected
subclass before touching state, so a rejected action leaves the game
exactly as it was.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from language_monopoly.board import Board
from language_monopoly.cards import Card, CardType, Deck, DeckType, create_decks
from language_monopoly.config import (
    ACADEMY_RENT_MULTIPLIER,
    HOUSE_RENT_MULTIPLIERS,
    MAX_HOUSES,
    GameConfig,
)
from language_monopoly.eligibility import (
    owns_color_set,
    require_build_house,
    require_consume_credit,
    require_upgrade,
)
from language_monopoly.exceptions import (
    IneligibleAction,
    InvalidActionError,
    InvariantViolation,
    NoPendingEvent,
    UnknownSpaceError,
    WrongResolver,
)
from language_monopoly.ledger import OwnershipLedger
from language_monopoly.money import EventLog, EventType
from language_monopoly.player import Player, PlayerState, PropertyState
from language_monopoly.spaces import BoardSpace
from language_monopoly.specials import (
    PendingSpecial,
    SpecialChoice,
    SpecialEffect,
    resolve_special,
    special_kind_for,
)
from language_monopoly.turns import validate_dice


class ActionType(Enum):
    """Types of actions a player can take."""

    ROLL_DICE = "roll_dice"
    END_TURN = "end_turn"
    BUY_PROPERTY = "buy_property"
    SKIP_PURCHASE = "skip_purchase"
    BUILD_HOUSE = "build_house"
    UPGRADE_ACADEMY = "upgrade_academy"
    CONSUME_CREDIT = "consume_credit"
    RESOLVE_SPECIAL = "resolve_special"


@dataclass(frozen=True)
class PendingPurchase:
    """An unowned space waiting for its lander to buy or skip it."""

    space_id: int
    player_id: int


class GameState:
    """
    Represents the complete state of a Language Monopoly game.
    This is the single shared state every action is applied to.
    """

    def __init__(
        self,
        config: GameConfig,
        players: List[Player],
        board: Optional[Board] = None,
        fate_cards: Optional[List[Card]] = None,
        supply_cards: Optional[List[Card]] = None,
    ):
        self.config = config
        self.board = board or Board()
        self.ledger = OwnershipLedger(self.board)
        self.event_log = EventLog()

        self.rng = random.Random(config.seed)
        self.decks: Dict[DeckType, Deck] = create_decks(self.rng, fate_cards, supply_cards)

        start_id = self.board.spaces[0].id
        self.players: Dict[int, PlayerState] = {}
        for player in players:
            if player.player_id in self.players:
                raise ValueError(f"Duplicate player id: {player.player_id}")
            self.players[player.player_id] = PlayerState(
                player.player_id,
                player.name,
                config.starting_resources,
                position=start_id,
                upgrade_credits=config.starting_upgrade_credits,
            )

        # Turn bookkeeping
        self.current_player_index = 0
        self.turn_number = 0
        self.has_rolled = False
        self.last_dice_roll: Optional[Tuple[int, int]] = None

        # At most one of each, game-wide
        self.pending_purchase: Optional[PendingPurchase] = None
        self.pending_special: Optional[PendingSpecial] = None

        # Bumped once per applied action
        self.version = 0

        self.event_log.log(
            EventType.GAME_START,
            players=[p.name for p in players],
            starting_resources=config.starting_resources,
            seed=config.seed,
        )

    @property
    def property_states(self) -> Dict[int, PropertyState]:
        """Space id -> PropertyState for every ownable space."""
        return dict(self.ledger.items())

    def get_current_player(self) -> PlayerState:
        """Get the current active player."""
        player_ids = sorted(self.players.keys())
        return self.players[player_ids[self.current_player_index % len(player_ids)]]

    def get_player(self, player_id: int) -> PlayerState:
        player = self.players.get(player_id)
        if player is None:
            raise InvalidActionError(f"Unknown player {player_id}", reason="unknown_player")
        return player

    def get_space(self, space_id: int) -> BoardSpace:
        """Board lookup that rejects unknown ids as an ineligible action."""
        try:
            return self.board.get_space(space_id)
        except UnknownSpaceError:
            raise IneligibleAction(f"Unknown space {space_id}", reason="not_ownable") from None

    def has_pending_decision(self, player_id: int) -> bool:
        """Whether `player_id` still owes a purchase or special decision."""
        return (self.pending_purchase is not None and self.pending_purchase.player_id == player_id) or (
            self.pending_special is not None and self.pending_special.player_id == player_id
        )

    def _require_turn(self, player_id: int) -> PlayerState:
        player = self.get_player(player_id)
        if self.get_current_player().player_id != player_id:
            raise InvalidActionError(f"It is not player {player_id}'s turn", reason="not_your_turn")
        return player

    # === TURN FLOW ===

    def roll(self, player_id: int, dice: Tuple[int, int]) -> int:
        """
        Apply a dice outcome for the current player and resolve the landing.
        Returns the id of the space landed on.
        """
        player = self._require_turn(player_id)
        try:
            die1, die2 = validate_dice(dice)
        except ValueError as e:
            raise InvalidActionError(str(e), reason="invalid_dice") from None
        if self.pending_purchase is not None or self.pending_special is not None:
            raise InvalidActionError("Resolve the pending decision first", reason="decision_pending")
        if self.has_rolled:
            raise InvalidActionError("Already rolled this turn", reason="already_rolled")

        self.has_rolled = True
        self.last_dice_roll = (die1, die2)
        self.event_log.log(
            EventType.DICE_ROLL,
            player_id=player_id,
            die1=die1,
            die2=die2,
            total=die1 + die2,
        )

        position = self.move_player(player.player_id, die1 + die2)
        self._resolve_landing(player, position)
        return position

    def move_player(self, player_id: int, steps: int) -> int:
        """
        Move a player forward by the specified number of spaces.
        Returns the new position.
        """
        player = self.players[player_id]
        old_position = player.position
        new_position, passed_start = self.board.advance(old_position, steps)

        if passed_start:
            player.resources += self.config.start_salary
            self.event_log.log(
                EventType.PASS_START,
                player_id=player_id,
                amount=self.config.start_salary,
                new_balance=player.resources,
            )

        player.position = new_position
        self.event_log.log(
            EventType.MOVE,
            player_id=player_id,
            from_position=old_position,
            to_position=new_position,
            spaces=steps,
        )
        return new_position

    def _resolve_landing(self, player: PlayerState, space_id: int) -> None:
        """Open a pending decision or charge rent for the space landed on."""
        space = self.board.get_space(space_id)
        self.event_log.log(EventType.LAND, player_id=player.player_id, position=space_id, space=space.name)

        state = self.ledger.get(space_id)
        if state is not None:
            if not state.is_owned():
                self.pending_purchase = PendingPurchase(space_id, player.player_id)
            elif state.owner_id != player.player_id:
                self._pay_rent(player, state.owner_id, self.calculate_rent(space_id))
            return

        kind = special_kind_for(space)
        if kind is not None:
            self.pending_special = PendingSpecial(kind, player.player_id)
            self.event_log.log(EventType.SPECIAL_PENDING, player_id=player.player_id, kind=kind.value)

    def calculate_rent(self, space_id: int) -> int:
        """
        Calculate the rent owed for landing on a space.

        Unimproved rent doubles when the owner holds the full color set.
        """
        state = self.ledger.get(space_id)
        if state is None or not state.is_owned():
            return 0

        space = self.board.get_space(space_id)
        base = space.base_rent or 0
        if state.academy:
            return base * ACADEMY_RENT_MULTIPLIER
        if state.houses:
            return base * HOUSE_RENT_MULTIPLIERS[state.houses]

        owner = self.players[state.owner_id]
        if owns_color_set(owner, space, self.ledger.as_mapping(), self.board):
            return base * 2
        return base

    def _pay_rent(self, payer: PlayerState, owner_id: int, amount: int) -> None:
        # Balances may go negative; bankruptcy is handled elsewhere
        owner = self.players[owner_id]
        payer.resources -= amount
        owner.resources += amount
        self.event_log.log(
            EventType.RENT_PAYMENT,
            player_id=payer.player_id,
            owner=owner_id,
            amount=amount,
            payer_balance=payer.resources,
            owner_balance=owner.resources,
        )

    def end_turn(self, player_id: int) -> None:
        """End the current player's turn and advance to next player."""
        self._require_turn(player_id)
        if self.has_pending_decision(player_id):
            raise InvalidActionError("Resolve the pending decision first", reason="decision_pending")
        if not self.has_rolled:
            raise InvalidActionError("Roll before ending the turn", reason="must_roll")

        self.has_rolled = False
        self.last_dice_roll = None
        self.current_player_index = (self.current_player_index + 1) % len(self.players)
        self.turn_number += 1

        self.event_log.log(
            EventType.TURN_START,
            player_id=self.get_current_player().player_id,
            turn=self.turn_number,
        )

    # === PURCHASE ===

    def _require_pending_purchase(self, space_id: int, player_id: Optional[int]) -> PendingPurchase:
        pending = self.pending_purchase
        if pending is None or pending.space_id != space_id:
            raise NoPendingEvent(f"No purchase is pending for space {space_id}")
        if player_id is not None and pending.player_id != player_id:
            raise WrongResolver(
                f"Player {player_id} cannot decide player {pending.player_id}'s purchase"
            )
        return pending

    def buy_property(self, player_id: int, space_id: int) -> None:
        """Buy the space of the pending purchase."""
        player = self.get_player(player_id)
        self._require_pending_purchase(space_id, player_id)
        space = self.board.get_space(space_id)
        price = space.cost or 0

        if player.resources < price:
            raise IneligibleAction(
                f"{player.name} cannot afford {space.name} ({price})",
                reason="insufficient_resources",
            )

        player.resources -= price
        self.ledger.assign_owner(space_id, player)
        self.pending_purchase = None

        self.event_log.log(
            EventType.PURCHASE,
            player_id=player_id,
            property=space.name,
            position=space_id,
            price=price,
            new_balance=player.resources,
        )

    def skip_purchase(self, space_id: int, player_id: Optional[int] = None) -> None:
        """Decline the pending purchase; the space stays unowned."""
        pending = self._require_pending_purchase(space_id, player_id)
        self.pending_purchase = None
        self.event_log.log(EventType.PURCHASE_SKIPPED, player_id=pending.player_id, position=space_id)

    # === BUILDING ===

    def build_house(self, player_id: int, space_id: int) -> None:
        """Build one house, paying the build cost."""
        player = self._require_turn(player_id)
        space = self.get_space(space_id)
        require_build_house(player, space, self.ledger.as_mapping(), self.board, self.config)

        state = self.ledger[space_id]
        player.resources -= self.config.build_cost
        state.houses += 1

        self.event_log.log(
            EventType.BUILD_HOUSE,
            player_id=player_id,
            property=space.name,
            position=space_id,
            cost=self.config.build_cost,
            houses=state.houses,
            new_balance=player.resources,
        )

    def upgrade_to_academy(self, player_id: int, space_id: int) -> None:
        """Turn four houses into an academy, paying the upgrade cost."""
        player = self._require_turn(player_id)
        space = self.get_space(space_id)
        require_upgrade(player, space, self.ledger.as_mapping(), self.config)

        state = self.ledger[space_id]
        player.resources -= self.config.academy_cost
        state.academy = True

        self.event_log.log(
            EventType.UPGRADE_ACADEMY,
            player_id=player_id,
            property=space.name,
            position=space_id,
            cost=self.config.academy_cost,
            new_balance=player.resources,
        )

    def consume_credit(self, player_id: int, space_id: int) -> None:
        """Advance one building step for free, spending one upgrade credit."""
        player = self._require_turn(player_id)
        space = self.get_space(space_id)
        require_consume_credit(player, space, self.ledger.as_mapping(), self.board)

        state = self.ledger[space_id]
        player.upgrade_credits -= 1
        if state.houses < MAX_HOUSES:
            state.houses += 1
        else:
            state.academy = True

        self.event_log.log(
            EventType.CREDIT_CONSUMED,
            player_id=player_id,
            property=space.name,
            position=space_id,
            houses=state.houses,
            academy=state.academy,
            credits_left=player.upgrade_credits,
        )

    # === SPECIAL EVENTS ===

    def resolve_special(self, player_id: int, choice: SpecialChoice) -> SpecialEffect:
        """Resolve the pending special event with the player's choice."""
        effect = resolve_special(self.pending_special, player_id, choice, self.config)
        player = self.players[player_id]

        player.resources += effect.resource_delta
        self.pending_special = None

        self.event_log.log(
            EventType.SPECIAL_RESOLVED,
            player_id=player_id,
            kind=effect.kind.value,
            resource_delta=effect.resource_delta,
            draw_from=effect.draw_from.value if effect.draw_from else None,
            new_balance=player.resources,
        )

        if effect.draw_from is not None:
            self.draw_card(player_id, effect.draw_from)
        return effect

    def draw_card(self, player_id: int, deck_type: DeckType) -> Card:
        """Draw a card from the given deck and execute it immediately."""
        deck = self.decks[deck_type]
        card = deck.draw()
        self.event_log.log(EventType.CARD_DRAW, player_id=player_id, deck=deck_type.value, card=card.description)
        self.execute_card(card, player_id)
        deck.discard(card)
        return card

    def execute_card(self, card: Card, player_id: int) -> None:
        """Execute the effect of a drawn card."""
        player = self.players[player_id]

        if card.card_type == CardType.COLLECT:
            player.resources += card.value
        elif card.card_type == CardType.PAY:
            player.resources -= card.value
        elif card.card_type == CardType.GRANT_UPGRADE_CREDIT:
            player.upgrade_credits += card.value
        else:
            raise InvariantViolation(f"Unhandled card type: {card.card_type}")

        self.event_log.log(
            EventType.CARD_EFFECT,
            player_id=player_id,
            card=card.description,
            type=card.card_type.value,
            resources=player.resources,
            credits=player.upgrade_credits,
        )

    # === INVARIANTS ===

    def check_invariants(self) -> None:
        """
        Verify ledger consistency and pending-decision sanity.

        Raises:
            InvariantViolation: if the state is inconsistent
        """
        self.ledger.check_invariants(self.players)

        if self.pending_purchase is not None:
            state = self.ledger.get(self.pending_purchase.space_id)
            if state is None or state.is_owned():
                raise InvariantViolation(
                    f"Pending purchase for space {self.pending_purchase.space_id} is not purchasable"
                )
            if self.pending_purchase.player_id not in self.players:
                raise InvariantViolation("Pending purchase names an unknown player")

        if self.pending_special is not None and self.pending_special.player_id not in self.players:
            raise InvariantViolation("Pending special names an unknown player")


def create_game(
    config: GameConfig,
    players: List[Player],
    board: Optional[Board] = None,
    fate_cards: Optional[List[Card]] = None,
    supply_cards: Optional[List[Card]] = None,
) -> GameState:
    """
    Create a new game with the specified configuration and players.

    Args:
        config: Game configuration
        players: List of players (at least one)
        board: Optional custom board (defaults to the standard board)
        fate_cards: Optional fate deck contents
        supply_cards: Optional supply deck contents

    Returns:
        Initialized GameState
    """
    if len(players) < 1:
        raise ValueError("Game requires at least 1 player")

    return GameState(config, players, board, fate_cards, supply_cards)
