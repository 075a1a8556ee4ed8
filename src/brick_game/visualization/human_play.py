from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from brick_game.tetris import GameConfig, TetrisGame, UserAction
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, UserAction] = {
    pygame.K_RETURN: UserAction.START,
    pygame.K_KP_ENTER: UserAction.START,
    pygame.K_p: UserAction.PAUSE,
    pygame.K_q: UserAction.TERMINATE,
    pygame.K_LEFT: UserAction.LEFT,
    pygame.K_RIGHT: UserAction.RIGHT,
    pygame.K_UP: UserAction.UP,
    pygame.K_DOWN: UserAction.DOWN,
    pygame.K_SPACE: UserAction.ACTION,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-block game with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--highscore", type=str, default="highscore.txt",
                   help="File holding the persisted high score")
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--tick-ms", type=int, default=50, help="Delay between engine ticks")
    p.add_argument("--log-level", type=str, default="WARNING")
    return p


def run(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    try:
        game = TetrisGame(GameConfig(random_seed=args.seed, highscore_path=args.highscore))
        renderer = Renderer(cell_size=args.cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.board.height, game.board.width))
        pygame.display.set_caption("Brick Game - Tetris")
        clock = pygame.time.Clock()

        running = True
        while running:
            # Input before the tick so a key affects this tick's transition
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.user_input(UserAction.TERMINATE)
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        game.user_input(UserAction.TERMINATE)
                        running = False
                        continue
                    action = KEY_TO_ACTION.get(event.key)
                    if action is None:
                        continue
                    # Down drops all the way, shift+Down takes a single step
                    hold = action == UserAction.DOWN and not (event.mod & pygame.KMOD_SHIFT)
                    game.user_input(action, hold)
                    if action == UserAction.TERMINATE:
                        running = False

            info = game.update_current_state()
            renderer.draw(screen, info)
            clock.tick(1000 // max(1, args.tick_ms))
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
