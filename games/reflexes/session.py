from __future__ import annotations
import random
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from .const import FALSE_START_MS, MAX_DELAY_MS, MAX_TRIALS, MIN_DELAY_MS, MIN_TRIALS
from .palette import ColorCycler


class State(Enum):
    Intro = 1
    IntroFade = 2  # one-tick pass-through between "start pressed" and the first wait
    Waiting = 3
    Running = 4    # color just changed; timer armed
    Stats = 5


class Event(Enum):
    NONE = "none"
    STARTED = "started"
    ARMED = "armed"
    FLASHED = "flashed"
    RECORDED = "recorded"
    FINISHED = "finished"
    FALSE_START = "false_start"
    RESTARTED = "restarted"


@dataclass(frozen=True)
class SessionConfig:
    min_delay_ms: int = MIN_DELAY_MS
    max_delay_ms: int = MAX_DELAY_MS
    false_start_ms: int = FALSE_START_MS
    min_trials: int = MIN_TRIALS
    max_trials: int = MAX_TRIALS

    def __post_init__(self):
        if not 0 <= self.min_delay_ms < self.max_delay_ms:
            raise ValueError(
                f"delay bounds must satisfy 0 <= min < max, got {self.min_delay_ms}..{self.max_delay_ms}")
        if self.false_start_ms < 0:
            raise ValueError(f"false_start_ms must be >= 0, got {self.false_start_ms}")
        if not 1 <= self.min_trials <= self.max_trials:
            raise ValueError(
                f"trial bounds must satisfy 1 <= min <= max, got {self.min_trials}..{self.max_trials}")

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "SessionConfig":
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise ValueError(f"options must be a mapping, got {type(options).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"unknown session options: {', '.join(unknown)}")
        values = {}
        for k, v in options.items():
            # bool is an int subclass; "yes" in YAML is not a millisecond count
            if isinstance(v, bool):
                raise ValueError(f"option {k!r} must be an integer, got {v!r}")
            try:
                values[k] = int(v)
            except (TypeError, ValueError):
                raise ValueError(f"option {k!r} must be an integer, got {v!r}")
        return cls(**values)


@dataclass(frozen=True)
class Stats:
    mean_ms: int
    best_ms: int
    latencies: Tuple[int, ...]


class Session:
    """
    One player's run from the intro screen to the stats screen.

    All timing is in integer milliseconds supplied by the caller, so the
    session never reads a clock itself. The wait before each flash is a
    stored deadline checked by tick(), never a sleep.
    """

    def __init__(self, cycler: ColorCycler, cfg: Optional[SessionConfig] = None,
                 rng: Optional[random.Random] = None):
        self.cycler = cycler
        self.cfg = cfg or SessionConfig()
        self.rng = rng or random.Random()
        self.reset()

    def reset(self) -> None:
        self.state: State = State.Intro
        self.wait_started_ms: Optional[int] = None
        self.pending_delay_ms: Optional[int] = None
        self.trial_start_ms: Optional[int] = None
        self.latencies: List[int] = []
        self.target_trials: int = self.rng.randint(self.cfg.min_trials, self.cfg.max_trials)

    # ---------- Helpers ----------
    @property
    def completed_trials(self) -> int:
        return len(self.latencies)

    @property
    def deadline_ms(self) -> Optional[int]:
        if self.wait_started_ms is None or self.pending_delay_ms is None:
            return None
        return self.wait_started_ms + self.pending_delay_ms

    def _enter_waiting(self, now_ms: int) -> None:
        self.state = State.Waiting
        self.wait_started_ms = now_ms
        self.pending_delay_ms = self.rng.randrange(self.cfg.min_delay_ms, self.cfg.max_delay_ms)
        self.trial_start_ms = None

    # ---------- Transitions ----------
    def start(self, now_ms: int) -> Event:
        if self.state != State.Intro:
            return Event.NONE
        self.state = State.IntroFade
        return Event.STARTED

    def tick(self, now_ms: int) -> Event:
        if self.state == State.IntroFade:
            self._enter_waiting(now_ms)
            return Event.ARMED

        if self.state == State.Waiting and now_ms >= self.deadline_ms:
            self.cycler.advance()
            self.state = State.Running
            self.trial_start_ms = now_ms
            self.wait_started_ms = None
            self.pending_delay_ms = None
            return Event.FLASHED

        return Event.NONE

    def react(self, now_ms: int) -> Event:
        if self.state != State.Running:
            return Event.NONE

        elapsed = now_ms - self.trial_start_ms
        if elapsed < self.cfg.false_start_ms:
            self.reset()
            return Event.FALSE_START

        self.latencies.append(elapsed)
        if self.completed_trials < self.target_trials:
            self._enter_waiting(now_ms)
            return Event.RECORDED

        self.state = State.Stats
        self.trial_start_ms = None
        return Event.FINISHED

    def press(self, now_ms: int) -> Event:
        """The single start/react key: starts from Intro, reacts elsewhere."""
        if self.state == State.Intro:
            return self.start(now_ms)
        return self.react(now_ms)

    def restart(self) -> Event:
        self.reset()
        return Event.RESTARTED

    # ---------- Stats ----------
    def stats(self) -> Stats:
        if not self.latencies:
            raise RuntimeError("no reaction times recorded yet")
        return Stats(
            mean_ms=sum(self.latencies) // len(self.latencies),
            best_ms=min(self.latencies),
            latencies=tuple(self.latencies),
        )
