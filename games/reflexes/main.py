from __future__ import annotations
import random
import pygame
from typing import List, Optional, Tuple

from engine.api import Game
from engine.app.context import Context
from engine.log import get_logger
from engine.render.shapes import draw_text_block

from .const import (
    INTRO_LINES, PALETTE, REACT_KEY, RESTART_KEY, START_COLOR, STATS_LINES,
    TEXT_BACKGROUND, TEXT_COLOR, TEXT_FONT_SIZE, TEXT_PAD)
from .palette import ColorCycler
from .session import Event, Session, SessionConfig, State

log = get_logger("reflexes")


def _resolve_key(name) -> int:
    if not isinstance(name, str) or not name:
        raise ValueError(f"key name must be a non-empty string, got {name!r}")
    # "space" -> K_SPACE, "r" -> K_r
    for attr in (f"K_{name}", f"K_{name.upper()}"):
        code = getattr(pygame, attr, None)
        if isinstance(code, int):
            return code
    raise ValueError(f"unknown key name {name!r}")


def _resolve_color(entry) -> Tuple[int, int, int]:
    if isinstance(entry, str):
        try:
            return PALETTE[entry.lower()]
        except KeyError:
            raise ValueError(f"unknown color name {entry!r}")
    try:
        r, g, b = (int(c) for c in entry)
    except TypeError:
        raise ValueError(f"color {entry!r} is neither a name nor [r, g, b]")
    if not all(0 <= c <= 255 for c in (r, g, b)):
        raise ValueError(f"color {entry!r} out of range")
    return r, g, b


def build_palette(manifest: dict, rng: Optional[random.Random] = None) -> ColorCycler:
    """
    Palette from the manifest (names or [r, g, b]) or the built-in CSS colors.
    Aliases like gray/grey collapse to one entry so every flash is a visible change.
    """
    entries = manifest.get("palette") or list(PALETTE)
    colors: List[Tuple[int, int, int]] = []
    for entry in entries:
        rgb = _resolve_color(entry)
        if rgb not in colors:
            colors.append(rgb)
    start_rgb = PALETTE[START_COLOR]
    start = colors.index(start_rgb) if start_rgb in colors else 0
    return ColorCycler(colors, index=start, rng=rng)


def validate_manifest(manifest: dict) -> None:
    """Raise ValueError for options, palette or key names the game can't use."""
    SessionConfig.from_options(manifest.get("options"))
    build_palette(manifest)
    resolve_keys(manifest)


def resolve_keys(manifest: dict) -> Tuple[int, int]:
    """Returns (react, restart) key codes; the two must differ."""
    keys = manifest.get("keys") or {}
    if not isinstance(keys, dict):
        raise ValueError(f"keys must be a mapping, got {type(keys).__name__}")
    react = _resolve_key(keys.get("react", REACT_KEY))
    restart = _resolve_key(keys.get("restart", RESTART_KEY))
    if react == restart:
        raise ValueError("react and restart must be different keys")
    return react, restart


class ReflexGame(Game):
    def on_load(self, ctx: Context, manifest, rng: Optional[random.Random] = None):
        self.ctx = ctx
        self.manifest = manifest

        cfg = SessionConfig.from_options(manifest.get("options"))
        self.session = Session(build_palette(manifest, rng), cfg, rng)

        self.react_key, self.restart_key = resolve_keys(manifest)

        self.intro_lines = [
            line.format(min_trials=cfg.min_trials, max_trials=cfg.max_trials)
            for line in INTRO_LINES]

    # ---------- Update ----------
    def on_update(self, dt_ms: float) -> None:
        ev = self.session.tick(self.ctx.ticks())
        if ev == Event.ARMED:
            log.debug("next flash in %d ms", self.session.pending_delay_ms)

    # ---------- Events ----------
    def on_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key == self.react_key:
            self._on_press()
        elif event.key == self.restart_key:
            self.session.restart()
            log.info("restarted")

    def _on_press(self):
        s = self.session
        trial_start = s.trial_start_ms
        now = self.ctx.ticks()
        ev = s.press(now)
        if ev == Event.FALSE_START:
            log.warning("Too quick - are you a cat? (%d ms)", now - trial_start)
        elif ev in (Event.RECORDED, Event.FINISHED):
            log.debug("trial %d/%d: %d ms", s.completed_trials, s.target_trials, s.latencies[-1])
            if ev == Event.FINISHED:
                log.info("Reaction times: %s", s.latencies)
        elif ev == Event.STARTED:
            log.debug("session started, %d flashes", s.target_trials)

    # ---------- Draw ----------
    def on_draw(self, surface: pygame.Surface) -> None:
        state = self.session.state
        if state == State.Intro:
            self._draw_text(surface, self.intro_lines)
        elif state == State.Stats:
            st = self.session.stats()
            self._draw_text(surface, [
                line.format(mean_ms=st.mean_ms, best_ms=st.best_ms) for line in STATS_LINES])
        else:
            # IntroFade, Waiting and Running look the same; the color change is the cue
            surface.fill(self.session.cycler.current)

    def _draw_text(self, surface, lines):
        surface.fill(TEXT_BACKGROUND)
        draw_text_block(surface, lines, pad=TEXT_PAD, color=TEXT_COLOR, size=TEXT_FONT_SIZE)

    def on_unload(self) -> None:
        session = getattr(self, "session", None)
        if session is not None and session.latencies:
            log.debug("exiting with %d recorded trials", session.completed_trials)


def get_game():
    return ReflexGame()
