"""
Human Play Mode
================

Play Drop Catch interactively. The session runs on its virtual clock, fed
with each frame's elapsed time.

Controls:
    - 1 / 2 / 3: Select easy / medium / hard (before starting)
    - Enter: Start
    - Mouse: Move the can
    - Arrow keys: Move the can in steps
    - Click/Space: Catch drops touching the can
    - R: Reset
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--difficulty NAME] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from dropcatch.core.config_loader import Difficulty, GameConfig, load_config
from dropcatch.core.drop_catalog import get_catalog
from dropcatch.core.game import GameSession, SessionState
from dropcatch.core.state_snapshot import GameSnapshot

logger = logging.getLogger("dropcatch.tools.play_human")

DIFFICULTY_KEYS = {
    "1": Difficulty.EASY,
    "2": Difficulty.MEDIUM,
    "3": Difficulty.HARD,
}

ARROW_STEPS = {
    "left": (-1, 0),
    "right": (1, 0),
    "up": (0, -1),
    "down": (0, 1),
}


class DropCatchRenderer:
    """
    Flat renderer: play area with a vertical gradient, drops as rounded
    squares in their type colour, the can as a yellow box.
    """

    def __init__(self, config: GameConfig, window_width: int, window_height: int):
        self._config = config
        self._window_width = window_width
        self._window_height = window_height

        # Colors
        self._page_bg = (79, 203, 83)
        self._gradient_top = (255, 255, 255)
        self._gradient_bottom = (21, 154, 72)
        self._can_fill = (255, 201, 7)
        self._text_dark = (0, 0, 0)
        self._text_light = (255, 255, 255)
        self._negative = (179, 0, 0)

        pygame.font.init()
        self._font_large = pygame.font.Font(None, 42)
        self._font_medium = pygame.font.Font(None, 28)
        self._font_small = pygame.font.Font(None, 20)

        self._type_colors = {kind.id: kind.color for kind in get_catalog(config)}

        self._calculate_layout()
        self._board_surface = self._create_gradient_board()

    def _calculate_layout(self) -> None:
        """Scale the board into the window below the HUD."""
        self._top_ui_height = 70
        self._bottom_ui_height = 40

        board_width = self._config.board.width
        board_height = self._config.board.height
        available_width = self._window_width - 40
        available_height = self._window_height - self._top_ui_height - self._bottom_ui_height - 20

        self._scale = min(available_width / board_width, available_height / board_height)
        self._board_render_width = int(board_width * self._scale)
        self._board_render_height = int(board_height * self._scale)
        self._board_x = (self._window_width - self._board_render_width) // 2
        self._board_y = self._top_ui_height + (available_height - self._board_render_height) // 2

    def _create_gradient_board(self) -> pygame.Surface:
        surface = pygame.Surface((self._board_render_width, self._board_render_height))
        h = self._board_render_height
        for y in range(h):
            t = y / h
            color = tuple(
                int(a * (1 - t) + b * t)
                for a, b in zip(self._gradient_top, self._gradient_bottom)
            )
            pygame.draw.line(surface, color, (0, y), (self._board_render_width, y))
        return surface

    def screen_to_board(self, pos: Tuple[int, int]) -> Tuple[float, float]:
        """Convert a window position to play-area coordinates."""
        return (
            (pos[0] - self._board_x) / self._scale,
            (pos[1] - self._board_y) / self._scale
        )

    def _board_rect(self, x: float, y: float, w: float, h: float) -> pygame.Rect:
        return pygame.Rect(
            int(self._board_x + x * self._scale),
            int(self._board_y + y * self._scale),
            max(1, int(w * self._scale)),
            max(1, int(h * self._scale))
        )

    def render(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        screen.fill(self._page_bg)
        screen.blit(self._board_surface, (self._board_x, self._board_y))

        clip = screen.get_clip()
        screen.set_clip(pygame.Rect(
            self._board_x, self._board_y, self._board_render_width, self._board_render_height
        ))
        self._draw_drops(screen, snap)
        self._draw_catcher(screen, snap)
        screen.set_clip(clip)

        self._draw_hud(screen, snap)
        self._draw_controls(screen)

        if snap.state == SessionState.IDLE.value:
            self._draw_banner(screen, f"Difficulty: {snap.difficulty.title()}", "1/2/3 to choose, Enter to start")
        elif snap.state == SessionState.ENDED.value:
            self._draw_banner(screen, snap.message, "Press R to reset")

    def _draw_drops(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        for i in range(len(snap.drop_mask)):
            if not snap.drop_mask[i]:
                continue
            size = float(snap.drop_size[i])
            rect = self._board_rect(float(snap.drop_x[i]), float(snap.drop_y[i]), size, size)
            color = self._type_colors.get(int(snap.drop_type_id[i]), (255, 255, 255))
            pygame.draw.rect(screen, color, rect, border_radius=rect.width // 2)

    def _draw_catcher(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        rect = self._board_rect(snap.catcher_x, snap.catcher_y, snap.catcher_width, snap.catcher_height)
        pygame.draw.rect(screen, self._can_fill, rect, border_radius=8)
        label = self._font_medium.render("CAN", True, self._text_dark)
        screen.blit(label, label.get_rect(center=rect.center))

    def _draw_hud(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        score_color = self._negative if snap.score < 0 else self._text_dark
        score = self._font_large.render(f"Score: {snap.score}", True, score_color)
        screen.blit(score, (20, 20))

        timer = self._font_large.render(f"Time: {snap.time_left}", True, self._text_dark)
        screen.blit(timer, (self._window_width - timer.get_width() - 20, 20))

    def _draw_controls(self, screen: pygame.Surface) -> None:
        text = "Mouse/Arrows: move   Click/Space: catch   R: reset   ESC: quit"
        hint = self._font_small.render(text, True, self._text_light)
        screen.blit(hint, (20, self._window_height - self._bottom_ui_height + 12))

    def _draw_banner(self, screen: pygame.Surface, title: str, hint: str) -> None:
        overlay = pygame.Surface((self._window_width, self._window_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 120))
        screen.blit(overlay, (0, 0))

        title_surface = self._font_large.render(title, True, self._text_light)
        hint_surface = self._font_medium.render(hint, True, self._text_light)
        cx, cy = self._window_width // 2, self._window_height // 2
        screen.blit(title_surface, title_surface.get_rect(center=(cx, cy - 20)))
        screen.blit(hint_surface, hint_surface.get_rect(center=(cx, cy + 20)))


class HumanPlayer:
    """Human-playable Drop Catch: pygame input in, session snapshots out."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        difficulty: Optional[str] = None,
        window_width: int = 900,
        window_height: int = 640,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps

        self._session = GameSession(config=config, seed=seed)
        if difficulty is not None:
            self._session.select_difficulty(difficulty)

        pygame.init()
        self._screen = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption("Drop Catch")
        self._clock = pygame.time.Clock()
        self._renderer = DropCatchRenderer(config, window_width, window_height)
        self._running = True
        self._last_state = self._session.state

    def run(self) -> int:
        """Run the game loop. Returns the last score."""
        logger.info("Drop Catch: Enter to start, R to reset, ESC to quit")

        self._clock.tick(self._target_fps)
        while self._running:
            self._handle_events()
            dt_ms = self._clock.tick(self._target_fps)
            self._session.advance(dt_ms)
            self._report_transitions()
            self._renderer.render(self._screen, self._session.snapshot())
            pygame.display.flip()

        pygame.quit()
        return self._session.score

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

            elif event.type in (pygame.MOUSEMOTION, pygame.FINGERMOTION):
                self._follow_pointer(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._catch()

    def _handle_key(self, event) -> None:
        name = pygame.key.name(event.key)
        if event.key == pygame.K_ESCAPE:
            self._running = False
        elif event.key == pygame.K_r:
            self._session.reset()
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._session.start()
        elif event.key == pygame.K_SPACE:
            self._catch()
        elif name in DIFFICULTY_KEYS:
            self._session.select_difficulty(DIFFICULTY_KEYS[name])
        elif name in ARROW_STEPS:
            dx, dy = ARROW_STEPS[name]
            self._session.nudge_catcher(dx, dy)

    def _follow_pointer(self, event) -> None:
        if event.type == pygame.FINGERMOTION:
            w, h = self._screen.get_size()
            pos = (int(event.x * w), int(event.y * h))
        else:
            pos = event.pos
        x, y = self._renderer.screen_to_board(pos)
        self._session.move_catcher_to(x, y)

    def _catch(self) -> None:
        for score_event in self._session.collect_overlapping():
            logger.info("  %+d (Total: %d)", score_event.points, score_event.score_after)

    def _report_transitions(self) -> None:
        state = self._session.state
        if state is self._last_state:
            return
        self._last_state = state
        if state is SessionState.ENDED:
            info = self._session.get_info()
            logger.info(
                "%s  score=%d caught=%d missed=%d",
                self._session.message, info["score"], info["catches"], info["missed"]
            )


def main():
    parser = argparse.ArgumentParser(description="Play Drop Catch interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=None,
                        help="Initial difficulty (default: from config)")
    parser.add_argument("--width", type=int, default=900, help="Window width (default: 900)")
    parser.add_argument("--height", type=int, default=640, help="Window height (default: 640)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            difficulty=args.difficulty,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps
        )
        score = player.run()
        logger.info("Final Score: %d", score)
        return 0
    except ImportError as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
