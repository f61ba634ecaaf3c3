from __future__ import annotations
from typing import Optional, Tuple
import pygame

from engine.api.config import EngineConfig
from engine.api.game_base import Game
from engine.app.context import Context
from engine.app.loader import manifest_window_size
from engine.log import get_logger

DEFAULT_SCREEN_SIZE = (500, 300)
BACKGROUND = (0, 0, 0)

log = get_logger("loop")


def run_game(
    game: Game,
    manifest: dict,
    screen_size: Optional[Tuple[int, int]] = None,
    fps: int = 60,
):
    if screen_size is None:
        screen_size = manifest_window_size(manifest, DEFAULT_SCREEN_SIZE)

    cfg = EngineConfig(
        screen_size=screen_size,
        title=str(manifest.get("name", type(game).__name__)),
        fps=fps,
    )

    pygame.init()
    pygame.display.set_caption(cfg.title)
    screen = pygame.display.set_mode(cfg.screen_size)
    clock = pygame.time.Clock()

    ctx = Context(
        screen=screen,
        cfg=cfg,
        screen_size=cfg.screen_size,
    )

    log.debug("window %dx%d @ %d fps", *cfg.screen_size, cfg.fps)

    running = True
    try:
        game.on_load(ctx, manifest)
        while running:
            dt = clock.tick(cfg.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                game.on_event(event)

            screen.fill(BACKGROUND)
            game.on_update(dt)
            game.on_draw(screen)
            pygame.display.flip()

    finally:
        game.on_unload()
        pygame.quit()
