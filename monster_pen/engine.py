"""Engine - cooperative poll loop, pacing, and lifecycle hooks."""

import os
import random
import time
from typing import Any, Callable, Iterable

from monster_pen.clock import Clock, MonotonicClock
from monster_pen.config import PenConfig
from monster_pen.input import make_input_system
from monster_pen.render import project
from monster_pen.simulation import make_simulation_system
from monster_pen.state import SimulationState
from monster_pen.types import Button, MonsterHandle, PollContext, SnapshotError, Species, System

_SNAPSHOT_VERSION = 1

Hook = Callable[[SimulationState, PollContext], None]


class Engine:
    """One poll = one button sample, the input step, then the simulation step.

    Extra systems added with ``add_system`` run after the built-in pair,
    in registration order.
    """

    def __init__(
        self,
        config: PenConfig | None = None,
        clock: Clock | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config if config is not None else PenConfig()
        self._clock = clock if clock is not None else MonotonicClock()
        self._state = SimulationState.new(self._config)
        self._systems: list[System] = [
            make_input_system(self._config),
            make_simulation_system(self._config),
        ]
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested: bool = False
        self._poll_number = 0

        if rng is not None:
            # An injected source is used as is; seed is kept only for the record.
            self._seed = seed
            self._rng = rng
        else:
            if seed is None:
                seed = int.from_bytes(os.urandom(8))
            self._seed = seed
            self._rng = random.Random(seed)

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def config(self) -> PenConfig:
        return self._config

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def poll_number(self) -> int:
        return self._poll_number

    def spawn(self, species: Species, position: int, **kwargs: Any) -> MonsterHandle:
        """Add a monster to the starting population, timed from now."""
        kwargs.setdefault("now", self._clock.now_ms())
        return self._state.registry.spawn(species, position, **kwargs)

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def frame(self) -> tuple[str, str]:
        return project(self._state, self._clock.now_ms(), self._config)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self, button: Button) -> PollContext:
        return PollContext(
            poll_number=self._poll_number,
            now=self._clock.now_ms(),
            button=button,
            request_stop=self._request_stop,
            random=self._rng,
        )

    def _run_hooks(self, hooks: list[Hook]) -> None:
        ctx = self._context(Button.NONE)
        for hook in hooks:
            hook(self._state, ctx)

    def _poll(self, button: Button) -> None:
        self._poll_number += 1
        ctx = self._context(button)
        for system in self._systems:
            system(self._state, ctx)
            if self._stop_requested:
                break

    def poll(self, button: Button = Button.NONE) -> None:
        self._stop_requested = False
        self._poll(button)

    def run(self, buttons: Iterable[Button]) -> None:
        """Poll once per sample in *buttons*, with start/stop hooks."""
        self._stop_requested = False
        self._run_hooks(self._start_hooks)

        for button in buttons:
            self._poll(button)
            if self._stop_requested:
                break

        self._run_hooks(self._stop_hooks)

    def run_forever(
        self,
        read_button: Callable[[], Button],
        interval_ms: int = 50,
        on_frame: Callable[[tuple[str, str]], None] | None = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._stop_requested = False
        self._run_hooks(self._start_hooks)

        interval = interval_ms / 1000.0
        while not self._stop_requested:
            start = time.monotonic()
            self._poll(read_button())
            if on_frame is not None:
                on_frame(self.frame())
            if self._stop_requested:
                break
            elapsed = time.monotonic() - start
            sleep_time = interval - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)

        self._run_hooks(self._stop_hooks)

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "poll_number": self._poll_number,
            "seed": self._seed,
            "rng_state": _serialize_rng_state(self._rng.getstate()),
            "state": self._state.snapshot(),
        }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )

        poll_number = data["poll_number"]
        seed = data["seed"]
        rng_state = _deserialize_rng_state(data["rng_state"])

        self._state.restore(data["state"])
        self._poll_number = poll_number
        self._seed = seed
        self._rng.setstate(rng_state)


def _serialize_rng_state(state: tuple[int, tuple[int, ...], float | None]) -> list[Any]:
    """Convert Random.getstate() tuple to JSON-compatible list."""
    version, internalstate, gauss_next = state
    return [version, list(internalstate), gauss_next]


def _deserialize_rng_state(data: list[Any]) -> tuple[int, tuple[int, ...], float | None]:
    version, internalstate, gauss_next = data
    return (version, tuple(internalstate), gauss_next)
