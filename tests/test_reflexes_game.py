import pygame
import pytest

from engine.api.config import EngineConfig
from engine.app.context import Context
from engine.app.loader import game_root_for, load_game_manifest
from games.reflexes.const import PALETTE
from games.reflexes.main import ReflexGame, build_palette, resolve_keys, validate_manifest
from games.reflexes.session import State


def keydown(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=0, unicode="", scancode=0)


@pytest.fixture
def manifest():
    return load_game_manifest(game_root_for("reflexes"))


@pytest.fixture
def surface(pygame_headless):
    return pygame.Surface((500, 300))


@pytest.fixture
def game(pygame_headless, surface, manifest, clock, rng):
    ctx = Context(
        screen=surface,
        cfg=EngineConfig(screen_size=(500, 300), title=manifest["name"]),
        screen_size=(500, 300),
        ticks=clock,
    )
    g = ReflexGame()
    g.on_load(ctx, manifest, rng=rng)
    return g


def run_to_flash(game, clock):
    game.on_update(16)
    assert game.session.state == State.Waiting
    clock.now = game.session.deadline_ms
    game.on_update(16)
    assert game.session.state == State.Running


def test_manifest_defaults(manifest):
    assert manifest["window"]["size"] == [500, 300]
    validate_manifest(manifest)


def test_palette_starts_on_black(manifest):
    cycler = build_palette(manifest)
    assert cycler.current == (0, 0, 0)
    # gray/grey style aliases are folded
    assert len(cycler) == len(set(PALETTE.values())) == 139


def test_manifest_palette_override():
    cycler = build_palette({"palette": ["white", "black", [255, 0, 0], "red"]})
    assert cycler.index == 1
    assert cycler.colors == [(255, 255, 255), (0, 0, 0), (255, 0, 0)]


@pytest.mark.parametrize("manifest", [
    {"keys": {"react": "not-a-key"}},
    {"palette": ["white", "no-such-color"]},
    {"palette": ["white"]},
    {"palette": ["white", [0, 0, 300]]},
    {"palette": ["white", 7]},
    {"options": {"false_start_ms": -1}},
    {"options": {"min_trials": None}},
    {"options": ["min_trials"]},
    {"keys": {"react": "space", "restart": "space"}},
    {"keys": {"restart": "SPACE"}},
    {"keys": {"react": None}},
    {"keys": {"react": 5}},
    {"keys": ["space", "r"]},
])
def test_validate_manifest_rejects(manifest):
    with pytest.raises(ValueError):
        validate_manifest(manifest)


def test_intro_draws_text_on_black(game, surface):
    game.on_draw(surface)
    assert surface.get_at((0, 0))[:3] == (0, 0, 0)
    # some red instruction text got drawn
    reds = [surface.get_at((x, y)).r for x in range(0, 500, 2) for y in range(0, 300, 2)]
    assert max(reds) > 0


def test_space_starts_and_flash_fills_window(game, surface, clock):
    game.on_event(keydown(pygame.K_SPACE))
    assert game.session.state == State.IntroFade
    game.on_draw(surface)
    assert surface.get_at((250, 150))[:3] == game.session.cycler.current

    run_to_flash(game, clock)
    game.on_draw(surface)
    assert surface.get_at((0, 0))[:3] == game.session.cycler.current
    assert surface.get_at((499, 299))[:3] == game.session.cycler.current


def test_full_session_with_keys(game, surface, clock):
    game.on_event(keydown(pygame.K_SPACE))
    while game.session.state != State.Stats:
        run_to_flash(game, clock)
        clock.advance(500)
        game.on_event(keydown(pygame.K_SPACE))

    assert game.session.latencies == [500] * game.session.target_trials
    game.on_draw(surface)
    assert surface.get_at((0, 0))[:3] == (0, 0, 0)

    game.on_event(keydown(pygame.K_r))
    assert game.session.state == State.Intro
    assert game.session.latencies == []


def test_false_start_logs_and_resets(game, clock, caplog):
    game.on_event(keydown(pygame.K_SPACE))
    run_to_flash(game, clock)
    clock.advance(40)
    with caplog.at_level("WARNING", logger="reflexes"):
        game.on_event(keydown(pygame.K_SPACE))
    assert game.session.state == State.Intro
    assert game.session.latencies == []
    assert "are you a cat" in caplog.text


def test_restart_mid_wait(game, clock):
    game.on_event(keydown(pygame.K_SPACE))
    game.on_update(16)
    assert game.session.state == State.Waiting
    game.on_event(keydown(pygame.K_r))
    assert game.session.state == State.Intro
    # stale deadline must not flash a restarted session
    clock.advance(10_000)
    game.on_update(16)
    assert game.session.state == State.Intro


def test_other_events_ignored(game):
    game.on_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(1, 1)))
    game.on_event(keydown(pygame.K_a))
    assert game.session.state == State.Intro


def test_resolve_keys_defaults_and_overrides():
    assert resolve_keys({}) == (pygame.K_SPACE, pygame.K_r)
    assert resolve_keys({"keys": {"react": "return", "restart": "escape"}}) == (
        pygame.K_RETURN, pygame.K_ESCAPE)
