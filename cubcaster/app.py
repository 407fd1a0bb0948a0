"""The interactive game: window, input handling and the command entry point."""

from __future__ import annotations

import random
import sys
from collections.abc import Mapping, Sequence

from .errors import CubError
from .grid import SCREEN_HEIGHT, SCREEN_WIDTH, Direction, Grid
from .player import ROTATION_STEP, Key, Player
from .render import Canvas, Texture, load_textures, render_frame
from .scene import LeadingBlankLine, Scene, scene_from_args

MINIMAP_WIDTH = 1000
MINIMAP_HEIGHT = 900
FRAME_RATE = 60


def check_size(grid: Grid) -> None:
    """Raise CubError when the map is larger than the screen."""
    if grid.width > SCREEN_WIDTH or grid.height > SCREEN_HEIGHT:
        raise CubError("Error: Invalid width or height")


class Game:
    """Game state: the scene, the player and the images drawn each frame."""

    def __init__(self, scene: Scene, textures: Mapping[Direction, Texture]) -> None:
        self.scene = scene
        self.textures = dict(textures)
        self.player = Player.spawn(scene.grid)
        self.view = Canvas(SCREEN_WIDTH, SCREEN_HEIGHT)
        self.minimap = Canvas(MINIMAP_WIDTH, MINIMAP_HEIGHT)
        self.mouse_x = 0
        self.mouse_y = 0
        self.rng = random.Random()
        self.running = True

    def draw(self) -> None:
        """Render the current frame into the view and minimap."""
        render_frame(self.view, self.minimap, self.scene, self.player, self.textures, self.rng)

    def on_key(self, key: Key) -> bool:
        """Apply a key event; returns False once the game should close."""
        self.running = self.player.handle_key(key, self.scene.grid)
        if self.running:
            self.draw()
        return self.running

    def on_mouse(self, x: int, y: int) -> None:
        """Turn the view when the mouse moves sideways, then redraw."""
        if x > self.mouse_x:
            self.mouse_x, self.mouse_y = x, y
            self.player.rotation_angle += ROTATION_STEP
        elif x < self.mouse_x:
            self.mouse_x, self.mouse_y = x, y
            self.player.rotation_angle -= ROTATION_STEP
        self.draw()

    def run(self) -> None:
        """Open the window and run the event loop until it is closed."""
        import pygame

        keys = {
            pygame.K_UP: Key.UP,
            pygame.K_DOWN: Key.DOWN,
            pygame.K_LEFT: Key.LEFT,
            pygame.K_RIGHT: Key.RIGHT,
            pygame.K_w: Key.W,
            pygame.K_a: Key.A,
            pygame.K_s: Key.S,
            pygame.K_d: Key.D,
            pygame.K_ESCAPE: Key.ESCAPE,
        }

        def surface(canvas: Canvas):
            return pygame.image.frombuffer(
                canvas.to_rgba_bytes(), (canvas.width, canvas.height), "RGBA"
            )

        pygame.init()
        try:
            screen = pygame.display.set_mode((self.view.width, self.view.height))
            pygame.display.set_caption("cub3D")
            pygame.key.set_repeat(200, 30)
            clock = pygame.time.Clock()
            self.draw()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    # Presses and releases both act, as in the key hook.
                    elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                        key = keys.get(event.key)
                        if key is not None and self.running:
                            self.on_key(key)
                if not self.running:
                    break
                self.on_mouse(*pygame.mouse.get_pos())
                screen.blit(surface(self.view), (0, 0))
                screen.blit(surface(self.minimap), (0, 0))
                pygame.display.flip()
                clock.tick(FRAME_RATE)
        finally:
            pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        scene = scene_from_args(args)
        textures = load_textures(scene.textures)
        check_size(scene.grid)
        Game(scene, textures).run()
    except LeadingBlankLine:
        return 0
    except CubError as error:
        error.report()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())