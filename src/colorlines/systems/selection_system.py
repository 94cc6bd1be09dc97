from esper import World

from colorlines.events.bus import (
    EVENT_CELL_CLICK,
    EVENT_CELL_DESELECTED,
    EVENT_CELL_SELECTED,
    EVENT_MOVE_ACCEPTED,
    EVENT_MOVE_REQUEST,
    EVENT_NEW_GAME_STARTED,
    EventBus,
)
from colorlines.systems.pathfinding import find_unreachable_cells
from colorlines.utils.session import get_or_create_selection, get_or_create_turn_state, get_state


class SelectionSystem:
    """Turns logical cell clicks into selections and move requests."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)
        self.event_bus.subscribe(EVENT_MOVE_ACCEPTED, self.on_move_accepted)
        self.event_bus.subscribe(EVENT_NEW_GAME_STARTED, self.on_new_game_started)

    @property
    def selected(self):
        return get_or_create_selection(self.world).selected

    def on_cell_click(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        if get_or_create_turn_state(self.world).turn_in_progress:
            return
        state = get_state(self.world)
        if state.game_over:
            return
        pos = (int(x), int(y))
        board = state.board
        if not board.in_bounds(pos):
            return
        selection = get_or_create_selection(self.world)
        if board.cell(pos).ball is not None:
            if selection.selected == pos:
                self.clear(reason="toggle")
                return
            selection.selected = pos
            selection.unreachable = tuple(find_unreachable_cells(board, pos))
            self.event_bus.emit(EVENT_CELL_SELECTED, x=pos[0], y=pos[1], unreachable=list(selection.unreachable))
            return
        if selection.selected is None:
            return
        # Selection survives a rejected request so the player can pick another target.
        self.event_bus.emit(EVENT_MOVE_REQUEST, source=selection.selected, target=pos)

    def on_move_accepted(self, sender, **kwargs):
        selection = get_or_create_selection(self.world)
        if selection.selected is not None and selection.selected == kwargs.get('source'):
            self.clear(reason="moved")

    def on_new_game_started(self, sender, **kwargs):
        self.clear(reason="new_game")

    def clear(self, reason: str) -> None:
        selection = get_or_create_selection(self.world)
        if selection.selected is None:
            return
        selection.selected = None
        selection.unreachable = ()
        self.event_bus.emit(EVENT_CELL_DESELECTED, reason=reason)
