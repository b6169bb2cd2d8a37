"""
Game session: the state machine the presentation layer drives.

GameSession owns the player board, the target solution and the hints
derived from it. It exposes imperative methods the front-end (run.py)
calls in response to user input and does not know anything about
rendering, timing, or input devices.

Events that are not valid in the current state are ignored. Every event,
accepted or not, is logged and passed to the optional on_event observer.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import config
from components import (
    Grid,
    Hint,
    blank_board,
    board_matches_solution,
    derive_hints,
    fill_cell,
    flag_cell,
)
from puzzles import Catalog, Puzzle, SolutionStrategy, Size, default_catalog, generate_solution, resolve_size

logger = logging.getLogger(__name__)

EventHook = Callable[[str, Dict[str, Any]], None]


class GameState(Enum):
    MAIN_MENU = "main_menu"
    SETUP = "setup"
    LEVEL_SELECT = "level_select"
    PLAYING = "playing"
    PAUSED = "paused"
    WON = "won"


# 메뉴 이동이 가능한 상태
MENU_STATES = frozenset({
    GameState.MAIN_MENU,
    GameState.SETUP,
    GameState.LEVEL_SELECT,
    GameState.PAUSED,
    GameState.WON,
})

# 게임 전/후 상태 (새 게임 시작 가능)
IDLE_STATES = frozenset({
    GameState.MAIN_MENU,
    GameState.SETUP,
    GameState.LEVEL_SELECT,
    GameState.WON,
})


@dataclass
class Viewport:
    """Window metadata supplied by the front-end; the engine only stores it."""

    width: int = 0
    height: int = 0


class GameSession:
    """Picross session state and rules.

    Responsibilities:
    - Load a solution (random or from the catalog) and derive its hints
    - Apply fill/flag moves to the player board
    - Check the win condition after every move
    - Track menu, pause and win states
    """

    def __init__(
        self,
        board: Grid,
        catalog: Catalog,
        rng: random.Random,
        strategy: Optional[SolutionStrategy] = None,
        viewport: Optional[Viewport] = None,
        on_event: Optional[EventHook] = None,
    ):
        self.board: Grid = board
        self.solution: Grid = Grid.empty()
        self.row_hints: List[List[Hint]] = []
        self.column_hints: List[List[Hint]] = []
        self.state = GameState.MAIN_MENU
        self.alternate_action = False
        self.viewport = viewport or Viewport()
        self.catalog = catalog
        self.rng = rng
        self.strategy = strategy
        self.puzzle: Optional[Puzzle] = None
        self.on_event = on_event

    @property
    def is_won(self) -> bool:
        return self.state is GameState.WON

    # ------------------------------------------------------------------
    # Game setup
    # ------------------------------------------------------------------

    def load_solution(self, solution: Grid, puzzle: Optional[Puzzle] = None) -> "GameSession":
        """Install a solution, recompute its hints and reset the board to match."""
        self.solution = solution
        self.row_hints, self.column_hints = derive_hints(solution)
        self.board = blank_board(solution.width, solution.height)
        self.puzzle = puzzle
        self.state = GameState.PLAYING
        logger.debug("solution loaded:\n%s", solution.to_text(lambda v: "#" if v else "."))
        return self

    def request_new_random_game(self, size: Optional[Size] = None) -> "GameSession":
        if self.state not in IDLE_STATES:
            return self._reject("new_random_game")
        if size is None:
            size = self.board
        solution = generate_solution(self.rng, size, self.strategy)
        self.load_solution(solution)
        self._emit("new_random_game", width=solution.width, height=solution.height)
        return self

    def select_level(self, index: int) -> "GameSession":
        if self.state is not GameState.LEVEL_SELECT:
            return self._reject("select_level", index=index)
        puzzle = self.catalog.get(index)
        if puzzle.is_empty or puzzle.solution.width == 0 or puzzle.solution.height == 0:
            return self._reject("select_level", index=index, reason="no such level")
        self.load_solution(puzzle.solution, puzzle)
        self._emit("select_level", index=index, name=puzzle.name)
        return self

    # ------------------------------------------------------------------
    # Player moves
    # ------------------------------------------------------------------

    def toggle_cell(self, x: int, y: int, modifier_held: Optional[bool] = None) -> "GameSession":
        if self.state is not GameState.PLAYING:
            return self._reject("toggle_cell", x=x, y=y)
        if modifier_held is None:
            modifier_held = self.alternate_action

        if modifier_held:
            self.board = flag_cell(self.board, x, y)
        else:
            self.board = fill_cell(self.board, x, y)

        # 매 수마다 바로 승리 판정
        if board_matches_solution(self.board, self.solution):
            self.state = GameState.WON
        self._emit("toggle_cell", x=x, y=y, flag=modifier_held,
                   cell=self.board.get(x, y), won=self.is_won)
        return self

    def clear_board(self) -> "GameSession":
        self.board = blank_board(self.board.width, self.board.height)
        self._emit("clear_board")
        return self

    def set_modifier(self, held: bool) -> "GameSession":
        self.alternate_action = held
        return self

    def toggle_row_hint(self, y: int, i: int) -> "GameSession":
        self._toggle_hint(self.row_hints, y, i)
        return self

    def toggle_column_hint(self, x: int, i: int) -> "GameSession":
        self._toggle_hint(self.column_hints, x, i)
        return self

    def _toggle_hint(self, lines: List[List[Hint]], line: int, i: int) -> None:
        if 0 <= line < len(lines) and 0 <= i < len(lines[line]):
            lines[line][i] = lines[line][i].toggled()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def toggle_pause(self) -> "GameSession":
        if self.state is GameState.PLAYING:
            self.state = GameState.PAUSED
        elif self.state is GameState.PAUSED:
            self.state = GameState.PLAYING
        else:
            return self._reject("toggle_pause")
        self._emit("toggle_pause")
        return self

    def show_setup(self) -> "GameSession":
        return self._navigate("show_setup", GameState.SETUP)

    def show_level_select(self) -> "GameSession":
        return self._navigate("show_level_select", GameState.LEVEL_SELECT)

    def return_to_main_menu(self) -> "GameSession":
        return self._navigate("return_to_main_menu", GameState.MAIN_MENU)

    def _navigate(self, event: str, target: GameState) -> "GameSession":
        if self.state not in MENU_STATES:
            return self._reject(event)
        self.state = target
        self._emit(event)
        return self

    def set_viewport(self, width: int, height: int) -> "GameSession":
        self.viewport = Viewport(width, height)
        return self

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def _emit(self, event: str, **details: Any) -> None:
        details["state"] = self.state.value
        logger.debug("%s %s", event, details)
        if self.on_event is not None:
            self.on_event(event, details)

    def _reject(self, event: str, **details: Any) -> "GameSession":
        details["rejected"] = True
        self._emit(event, **details)
        return self


def new_session(
    viewport: Optional[Viewport] = None,
    catalog: Optional[Catalog] = None,
    rng: Optional[random.Random] = None,
    strategy: Optional[SolutionStrategy] = None,
    on_event: Optional[EventHook] = None,
    size: Size = config.DEFAULT_SIZE,
) -> GameSession:
    """Create a session in the main menu with a blank default-size board."""
    width, height = resolve_size(size)
    return GameSession(
        board=blank_board(width, height),
        catalog=catalog if catalog is not None else default_catalog(),
        rng=rng if rng is not None else random.Random(),
        strategy=strategy,
        viewport=viewport,
        on_event=on_event,
    )
