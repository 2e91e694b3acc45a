# src/weekboard/connectors/console_celebration.py

from __future__ import annotations

import random
import shutil
import sys
from typing import TextIO

from ..tasks.completion import CelebrationConfig

_PARTICLES = "*+.o~^"


class ConsoleConfetti:
    """
    Terminal stand-in for the confetti burst.

    Particles are scattered on one line around `origin_y`-derived padding; `spread`
    (degrees) controls how wide the burst is relative to the terminal width.
    """

    def __init__(self, out: TextIO | None = None, *, seed: int | None = None) -> None:
        self._out = out
        self._rng = random.Random(seed)

    def __call__(self, config: CelebrationConfig) -> None:
        out = self._out or sys.stdout
        width = shutil.get_terminal_size((80, 24)).columns
        burst = max(10, min(width, int(width * min(config.spread, 180) / 180)))
        cells = [" "] * burst
        for _ in range(max(0, config.particle_count)):
            cells[self._rng.randrange(burst)] = self._rng.choice(_PARTICLES)
        pad = " " * ((width - burst) // 2)
        blank_rows = int(round(config.origin_y * 2))
        out.write("\n" * blank_rows)
        out.write(f"{pad}{''.join(cells).rstrip()}\n")
        out.write(f"{pad}All tasks done for the week!\n")
        out.flush()
