"""
Board registry: the static spaces and color-group membership.
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from language_monopoly.exceptions import UnknownSpaceError
from language_monopoly.spaces import BoardSpace, SpaceType, property_space


def create_standard_spaces() -> List[BoardSpace]:
    """Create the standard 24-space Language Monopoly board."""
    return [
        BoardSpace(0, "Start", SpaceType.START, "Collect your salary when passing."),
        property_space(1, "Radical Lane", 60, 4, "brown", "Where every character begins."),
        property_space(2, "Stroke Street", 60, 4, "brown", "Eight basic strokes, one street."),
        BoardSpace(3, "Free Library", SpaceType.LIBRARY, "Take 50 resources or draw a fate card."),
        property_space(4, "Idiom Avenue", 100, 6, "light_blue", "Four characters, one story."),
        property_space(5, "Proverb Place", 100, 6, "light_blue", "Old sayings, new tenants."),
        property_space(6, "Couplet Court", 120, 8, "light_blue", "Paired lines on every door."),
        BoardSpace(7, "Canteen Supply Station", SpaceType.CANTEEN, "Take 100 resources or draw a supply card."),
        property_space(8, "Rhyme Row", 140, 10, "pink", "Every house ends the same way."),
        property_space(9, "Verse Way", 140, 10, "pink", "A road measured in syllables."),
        property_space(10, "Ode Terrace", 160, 12, "pink", "Praise sung from the balconies."),
        BoardSpace(11, "Rest Pavilion", SpaceType.REST, "Catch your breath."),
        property_space(12, "Essay Road", 180, 14, "orange", "Introduction, body, conclusion."),
        BoardSpace(13, "Oratory Square", SpaceType.ORATORY, "Speak well for +50, falter for -30."),
        property_space(14, "Fable Fields", 180, 14, "orange", "Talking animals, moral endings."),
        property_space(15, "Poetry Park", 200, 16, "orange", "Benches carved with verses."),
        BoardSpace(16, "Free Library", SpaceType.LIBRARY, "Take 50 resources or draw a fate card."),
        property_space(17, "Classic Hall", 260, 22, "green", "The canon, bound in leather."),
        property_space(18, "Scholar Square", 260, 22, "green", "Debate at every corner."),
        BoardSpace(19, "Canteen Supply Station", SpaceType.CANTEEN, "Take 100 resources or draw a supply card."),
        property_space(20, "Calligraphy Garden", 280, 24, "green", "Ink, brush and patience."),
        property_space(21, "Lexicon Lane", 300, 26, "green", "Every word has an address."),
        property_space(22, "Grammar Gardens", 350, 35, "dark_blue", "Rules grow in neat rows."),
        property_space(23, "Rhetoric Ridge", 400, 50, "dark_blue", "The view persuades everyone."),
    ]


class Board:
    """Read-only registry of board spaces and color groups."""

    def __init__(self, spaces: Optional[Sequence[BoardSpace]] = None):
        spaces = list(spaces) if spaces is not None else create_standard_spaces()
        if not spaces:
            raise ValueError("Board requires at least one space")

        by_id: Dict[int, BoardSpace] = {}
        for space in spaces:
            if space.id in by_id:
                raise ValueError(f"Duplicate space id: {space.id}")
            by_id[space.id] = space

        self.spaces: tuple = tuple(sorted(spaces, key=lambda s: s.id))
        self._by_id: Mapping[int, BoardSpace] = MappingProxyType(by_id)
        self._track_index = {space.id: i for i, space in enumerate(self.spaces)}
        self.color_groups: Mapping[str, FrozenSet[int]] = MappingProxyType(
            self._build_color_groups(self.spaces)
        )

    @staticmethod
    def _build_color_groups(spaces: Iterable[BoardSpace]) -> Dict[str, FrozenSet[int]]:
        """Build a mapping of color groups to space ids."""
        groups: Dict[str, set] = {}
        for space in spaces:
            if space.color is not None:
                groups.setdefault(space.color, set()).add(space.id)
        return {color: frozenset(ids) for color, ids in groups.items()}

    def __len__(self) -> int:
        return len(self.spaces)

    def __contains__(self, space_id: object) -> bool:
        return space_id in self._by_id

    def get_space(self, space_id: int) -> BoardSpace:
        """Get the space with the given id."""
        try:
            return self._by_id[space_id]
        except KeyError:
            raise UnknownSpaceError(f"No board space with id {space_id}") from None

    def advance(self, space_id: int, steps: int) -> Tuple[int, bool]:
        """
        Move forward along the track from a space.

        Returns the id of the destination space and whether the move
        passed or landed on the first space of the track.
        """
        index = self._track_index[self.get_space(space_id).id]
        target = index + steps
        return self.spaces[target % len(self.spaces)].id, target >= len(self.spaces)

    def color_group(self, color: Optional[str]) -> FrozenSet[int]:
        """Get all space ids in a color group (empty if unknown)."""
        if color is None:
            return frozenset()
        return self.color_groups.get(color, frozenset())

    def ownable_space_ids(self) -> List[int]:
        return [s.id for s in self.spaces if s.is_ownable]
