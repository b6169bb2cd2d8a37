import logging
import sys
import pygame
import config
from components import CellState
from session import GameSession, GameState, new_session, Viewport
from pygame.locals import Rect

logger = logging.getLogger(__name__)

SIZE_KEYS = {pygame.K_1: "SMALL", pygame.K_2: "MEDIUM", pygame.K_3: "LARGE"}


def layout_for(cols: int, rows: int) -> None:
    """Recompute window geometry in config for a cols x rows board."""
    max_row_hints = (cols + 1) // 2
    max_col_hints = (rows + 1) // 2
    config.margin_left = 10 + max_row_hints * config.hint_cell_size
    config.margin_top = config.header_height + max_col_hints * config.hint_cell_size
    config.width = max(360, config.margin_left + cols * config.cell_size + config.margin_right)
    config.height = max(360, config.margin_top + rows * config.cell_size + config.margin_bottom)
    config.display_dimension = (config.width, config.height)


# ============================ Renderer ============================
class Renderer:
    def __init__(self, screen: pygame.Surface, session: GameSession):
        self.screen = screen
        self.session = session
        self.font = pygame.font.Font(config.font_name, config.font_size)
        self.hint_font = pygame.font.Font(config.font_name, config.hint_font_size)
        self.header_font = pygame.font.Font(config.font_name, config.header_font_size)
        self.result_font = pygame.font.Font(config.font_name, config.result_font_size)

    def cell_rect(self, col: int, row: int) -> pygame.Rect:
        x = config.margin_left + col * config.cell_size
        y = config.margin_top + row * config.cell_size
        return Rect(x, y, config.cell_size, config.cell_size)

    def draw_cell(self, col: int, row: int) -> None:
        state = self.session.board.get(col, row)
        rect = self.cell_rect(col, row)

        if state is CellState.FILLED:
            pygame.draw.rect(self.screen, config.color_cell_filled, rect)
        else:
            pygame.draw.rect(self.screen, config.color_cell_empty, rect)
            if state is CellState.FLAGGED:
                # X 표시
                pad = rect.width // 4
                pygame.draw.line(self.screen, config.color_flag, (rect.left + pad, rect.top + pad), (rect.right - pad, rect.bottom - pad), 3)
                pygame.draw.line(self.screen, config.color_flag, (rect.right - pad, rect.top + pad), (rect.left + pad, rect.bottom - pad), 3)

        pygame.draw.rect(self.screen, config.color_grid, rect, 1)

    def draw_major_lines(self) -> None:
        board = self.session.board
        for c in range(0, board.width + 1, 5):
            x = config.margin_left + c * config.cell_size
            pygame.draw.line(self.screen, config.color_grid_major, (x, config.margin_top), (x, config.margin_top + board.height * config.cell_size), 2)
        for r in range(0, board.height + 1, 5):
            y = config.margin_top + r * config.cell_size
            pygame.draw.line(self.screen, config.color_grid_major, (config.margin_left, y), (config.margin_left + board.width * config.cell_size, y), 2)

    def draw_hints(self) -> None:
        size = config.hint_cell_size
        for r, hints in enumerate(self.session.row_hints):
            y = config.margin_top + r * config.cell_size + config.cell_size // 2
            for i, hint in enumerate(reversed(hints)):
                color = config.color_hint_used if hint.used else config.color_hint
                label = self.hint_font.render(str(hint.group_size), True, color)
                self.screen.blit(label, label.get_rect(center=(config.margin_left - size // 2 - i * size, y)))
        for c, hints in enumerate(self.session.column_hints):
            x = config.margin_left + c * config.cell_size + config.cell_size // 2
            for i, hint in enumerate(reversed(hints)):
                color = config.color_hint_used if hint.used else config.color_hint
                label = self.hint_font.render(str(hint.group_size), True, color)
                self.screen.blit(label, label.get_rect(center=(x, config.margin_top - size // 2 - i * size)))

    def draw_header(self, left_text: str, right_text: str) -> None:
        pygame.draw.rect(self.screen, config.color_header, Rect(0, 0, config.width, config.header_height - 4))
        left = self.header_font.render(left_text, True, config.color_header_text)
        right = self.header_font.render(right_text, True, config.color_header_text)
        self.screen.blit(left, (10, 12))
        self.screen.blit(right, (config.width - right.get_width() - 10, 12))

    def draw_menu(self, lines) -> None:
        y = config.header_height + 20
        for line in lines:
            label = self.font.render(line, True, config.color_menu_item)
            self.screen.blit(label, (20, y))
            y += config.font_size + 8

    def draw_overlay(self, text: str) -> None:
        overlay = pygame.Surface((config.width, config.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, config.result_overlay_alpha))
        self.screen.blit(overlay, (0, 0))
        label = self.result_font.render(text, True, config.color_result)
        self.screen.blit(label, label.get_rect(center=(config.width // 2, config.height // 2)))

# ============================ Input ============================
class InputController:
    def __init__(self, game: "Game"):
        self.game = game

    def pos_to_grid(self, x: int, y: int):
        board = self.game.session.board
        if not (config.margin_left <= x < config.margin_left + board.width * config.cell_size): return -1, -1
        if not (config.margin_top <= y < config.margin_top + board.height * config.cell_size): return -1, -1
        col = (x - config.margin_left) // config.cell_size
        row = (y - config.margin_top) // config.cell_size
        return (col, row) if board.in_bounds(col, row) else (-1, -1)

    def pos_to_hint(self, x: int, y: int):
        """Return ("row"|"column", line, hint index) for a click on a hint, else None."""
        session = self.game.session
        size = config.hint_cell_size
        if x < config.margin_left and config.margin_top <= y:
            line = (y - config.margin_top) // config.cell_size
            if line < len(session.row_hints):
                i = len(session.row_hints[line]) - 1 - (config.margin_left - 1 - x) // size
                return "row", line, i
        if y < config.margin_top and config.header_height <= y and config.margin_left <= x:
            line = (x - config.margin_left) // config.cell_size
            if line < len(session.column_hints):
                i = len(session.column_hints[line]) - 1 - (config.margin_top - 1 - y) // size
                return "column", line, i
        return None

    def handle_mouse(self, pos, button) -> None:
        session = self.game.session
        col, row = self.pos_to_grid(pos[0], pos[1])
        if col == -1:
            hit = self.pos_to_hint(pos[0], pos[1])
            if hit is None or button != config.mouse_left: return
            axis, line, i = hit
            if axis == "row": session.toggle_row_hint(line, i)
            else: session.toggle_column_hint(line, i)
            return
        if button == config.mouse_left:
            session.toggle_cell(col, row)
        elif button == config.mouse_right:
            session.toggle_cell(col, row, modifier_held=True)

# ============================ Game ============================
class Game:
    def __init__(self):
        pygame.init()
        pygame.display.set_caption(config.title)
        self.clock = pygame.time.Clock()
        self.size = config.DEFAULT_SIZE
        n = config.SIZE_PRESETS[self.size]
        layout_for(n, n)
        self.screen = pygame.display.set_mode(config.display_dimension)
        self.session = new_session(viewport=Viewport(config.width, config.height))
        self.renderer = Renderer(self.screen, self.session)
        self.input = InputController(self)
        self._shown = (n, n)

    def _sync_layout(self):
        board = self.session.board
        if (board.width, board.height) == self._shown: return
        layout_for(board.width, board.height)
        self.screen = pygame.display.set_mode(config.display_dimension)
        self.renderer.screen = self.screen
        self.session.set_viewport(config.width, config.height)
        self._shown = (board.width, board.height)

    def set_size(self, size: str):
        if size in config.SIZE_PRESETS:
            self.size = size
            self.session.request_new_random_game(size)

    def draw(self):
        self.screen.fill(config.color_bg)
        session = self.session
        state = session.state

        if state is GameState.MAIN_MENU or state is GameState.SETUP:
            self.renderer.draw_header("PICROSS", self.size)
            self.renderer.draw_menu(["N  new random puzzle", "1/2/3  small / medium / large", "L  choose a level"])
        elif state is GameState.LEVEL_SELECT:
            self.renderer.draw_header("LEVELS", "")
            names = session.catalog.names()
            self.renderer.draw_menu([f"{i + 1}. {name}" for i, name in enumerate(names[:9])])
        else:
            title = session.puzzle.name if session.puzzle else "Random"
            self.renderer.draw_header(title, f"{session.board.width}x{session.board.height}")
            self.renderer.draw_hints()
            for r in range(session.board.height):
                for c in range(session.board.width):
                    self.renderer.draw_cell(c, r)
            self.renderer.draw_major_lines()
            if state is GameState.WON: self.renderer.draw_overlay("SOLVED")
            elif state is GameState.PAUSED: self.renderer.draw_overlay("PAUSED")
        pygame.display.flip()

    def handle_key(self, key):
        session = self.session
        if session.state is GameState.LEVEL_SELECT and pygame.K_1 <= key <= pygame.K_9:
            session.select_level(key - pygame.K_1)
        elif key in SIZE_KEYS and session.state is not GameState.PLAYING: self.set_size(SIZE_KEYS[key])
        elif key == pygame.K_n: session.request_new_random_game(self.size)
        elif key == pygame.K_l: session.show_level_select()
        elif key == pygame.K_c: session.clear_board()
        elif key == pygame.K_p: session.toggle_pause()
        elif key == pygame.K_ESCAPE:
            if session.state is GameState.PLAYING: session.toggle_pause()
            session.return_to_main_menu()

    def run_step(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT: return False
            if event.type == pygame.KEYDOWN: self.handle_key(event.key)
            if event.type in (pygame.KEYDOWN, pygame.KEYUP):
                self.session.set_modifier(bool(pygame.key.get_mods() & pygame.KMOD_SHIFT))
            if event.type == pygame.MOUSEBUTTONDOWN:
                self.input.handle_mouse(event.pos, event.button)
        self._sync_layout()
        self.draw()
        self.clock.tick(config.fps)
        return True

def main():
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("starting %s", config.title)
    game = Game()
    while game.run_step(): pass
    pygame.quit()

if __name__ == "__main__":
    main()
