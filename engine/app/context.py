from __future__ import annotations
from dataclasses import dataclass, field
import pygame
from typing import Callable, Tuple
from engine.api.config import EngineConfig


@dataclass
class Context:
    screen: pygame.Surface
    cfg: EngineConfig
    screen_size: Tuple[int, int]
    # millisecond time source; tests swap in a fake
    ticks: Callable[[], int] = field(default=pygame.time.get_ticks)
