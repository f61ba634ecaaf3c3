import pygame
from typing import List, Sequence, Tuple


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24):
    font = pygame.font.SysFont(None, size)
    surface.blit(font.render(text, True, color), pos)


def wrap_lines(font: pygame.font.Font, lines: Sequence[str], max_w: int) -> List[str]:
    out: List[str] = []
    for line in lines:
        words = line.split()
        if not words:
            out.append("")
            continue
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if font.size(candidate)[0] <= max_w:
                current = candidate
            else:
                out.append(current)
                current = word
        out.append(current)
    return out


def draw_text_block(surface: pygame.Surface, lines: Sequence[str], pad: int = 20,
                    color=(230, 230, 230), size=24):
    """
    Draw word-wrapped lines left-justified and aligned to the bottom of the
    surface, inset by `pad` on every side. Blank lines keep their height.
    """
    font = pygame.font.SysFont(None, size)
    wrapped = wrap_lines(font, lines, surface.get_width() - 2 * pad)
    step = font.get_linesize()
    y = surface.get_height() - pad - step * len(wrapped)
    for line in wrapped:
        if line:
            draw_text(surface, line, (pad, y), color=color, size=size)
        y += step
