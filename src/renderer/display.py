# renderer/display.py
from typing import Tuple

import numpy as np
import pygame


class LiveDisplay:
    """
    Pygame window showing pixels as the render produces them.

    Pixels are addressed by raster index, so results can be drawn in
    whatever order the workers finish them.
    """
    def __init__(self, width: int, height: int, scale: int = 1,
                 caption: str = "Path Tracer"):
        pygame.init()
        self.width = width
        self.height = height
        self.window_width = width * scale
        self.window_height = height * scale
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption(caption)
        self.canvas = pygame.Surface((width, height))
        self.canvas.fill((0, 0, 0))
        self.running = True

    def draw_pixel(self, index: int, rgb: Tuple[int, int, int]) -> None:
        row, col = divmod(index, self.width)
        self.canvas.set_at((col, row), rgb)

    def draw_image(self, image: np.ndarray) -> None:
        """Replaces the canvas with an 8-bit (height, width, 3) image."""
        # surfarray indexes [x, y], so swap the image axes
        self.canvas = pygame.surfarray.make_surface(np.transpose(image, (1, 0, 2)))

    def present(self) -> None:
        frame = self.canvas
        if (self.window_width, self.window_height) != (self.width, self.height):
            frame = pygame.transform.scale(frame, (self.window_width, self.window_height))
        self.screen.blit(frame, (0, 0))
        pygame.display.flip()

    def pump(self) -> bool:
        """Processes window events; returns False once the window was closed."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False
        return self.running

    def wait_until_closed(self, fps: int = 30) -> None:
        clock = pygame.time.Clock()
        while self.pump():
            self.present()
            clock.tick(fps)

    def close(self) -> None:
        pygame.quit()
