from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from brick_game.tetris import GameInfo, GameState


PALETTE = {
    0: (20, 20, 26),
    1: (0, 240, 240),  # I
    2: (240, 240, 0),  # O
    3: (160, 0, 240),  # T
    4: (0, 0, 240),    # J
    5: (240, 160, 0),  # L
    6: (0, 240, 0),    # S
    7: (240, 0, 0),    # Z
}


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return PALETTE.get(int(v), (200, 200, 200))


def to_rgb(grid: np.ndarray, cell: int = 12) -> np.ndarray:
    """Paint a tag grid as an RGB image, ``cell`` pixels per cell."""
    lut = np.array([_color_for_value(v) for v in range(len(PALETTE))], dtype=np.uint8)
    img = lut[np.clip(grid, 0, len(PALETTE) - 1)]
    return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font = None

    def window_size(self, height: int, width: int) -> Tuple[int, int]:
        panel_w = 7 * self.cell_size
        return (width * self.cell_size + panel_w + self.margin * 3,
                height * self.cell_size + self.margin * 2)

    def _grid_surface(self, state: np.ndarray, cell_size: int) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * cell_size, h * cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(x * cell_size, y * cell_size, cell_size - 1, cell_size - 1)
                pygame.draw.rect(surf, _color_for_value(state[y, x]), rect)
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int],
              color: Tuple[int, int, int] = (230, 230, 230)) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        screen.blit(self._font.render(text, True, color), pos)

    def draw(self, screen: pygame.Surface, info: GameInfo) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(info.field, self.cell_size), (self.margin, self.margin))

        x0 = self.margin * 2 + info.field.shape[1] * self.cell_size
        preview_cell = self.cell_size * 3 // 4
        self._text(screen, "Next", (x0, self.margin))
        screen.blit(self._grid_surface(info.next, preview_cell), (x0, self.margin + 24))

        y = self.margin + 24 + 4 * preview_cell + 16
        lines = [
            f"Score: {info.score}",
            f"High: {info.high_score}",
            f"Level: {info.level}",
            f"Speed: {info.speed} ms",
        ]
        for i, txt in enumerate(lines):
            self._text(screen, txt, (x0, y + i * 22))

        if info.state == GameState.START:
            self._text(screen, "Enter to start", (self.margin, 2), (255, 255, 255))
        elif info.pause == 1:
            self._text(screen, "Paused - P to resume", (self.margin, 2), (255, 255, 255))
        elif info.pause == 2:
            self._text(screen, "Game Over - Enter to restart, Q to quit", (self.margin, 2),
                       (255, 100, 100))
        pygame.display.flip()
