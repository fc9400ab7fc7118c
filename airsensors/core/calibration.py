"""Baseline persistence for the SGP30 compensation algorithm."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from pathlib import Path

from airsensors.core.errors import InvalidCalibrationDataError
from airsensors.core.model import Baseline

LOGGER = logging.getLogger(__name__)

DEFAULT_INTERVAL_S = 30.0


class BaselineStore:
    """Track when the baseline was last written to ``path`` and persist it.

    The timestamp is per instance; ``clock`` must be monotonic.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        interval_s: float = DEFAULT_INTERVAL_S,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.path = Path(path)
        self.interval_s = interval_s
        self._clock = clock
        self.last_save = clock()

    def load(self) -> Baseline | None:
        """Return the stored baseline, or None on a cold start (no file).

        Raises InvalidCalibrationDataError when the file has the wrong size or
        a group fails CRC-8.
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            LOGGER.info("No stored baseline at %s", self.path)
            return None
        except OSError as exc:
            raise InvalidCalibrationDataError(f"Could not read baseline file {self.path}: {exc}") from exc
        return Baseline.from_bytes(data)

    def is_due(self) -> bool:
        return self._clock() - self.last_save >= self.interval_s

    def save(self, baseline: Baseline) -> bool:
        """Write ``baseline`` over the file; returns False if the write failed.

        The timestamp moves forward either way, so a failed write is retried
        one interval later rather than on every read.
        """
        self.last_save = self._clock()
        try:
            self.path.write_bytes(baseline.raw)
        except OSError as exc:
            LOGGER.warning("Could not save baseline to %s: %s", self.path, exc)
            return False
        LOGGER.info("Saved baseline %s to %s", baseline.raw.hex(), self.path)
        return True
