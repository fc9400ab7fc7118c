"""Driver for the Sensirion SGP30 CO2/TVOC gas sensor.

Every data word on the wire is followed by its CRC-8 and each word is
checked on its own. The on-chip compensation baseline can be persisted to a
file and is written back at startup.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable

from airsensors.core.calibration import DEFAULT_INTERVAL_S, BaselineStore
from airsensors.core.codec import word
from airsensors.core.integrity import require_crc8_groups
from airsensors.core.model import BASELINE_SIZE, AirQuality, Baseline, FeatureSet
from airsensors.core.transaction import TransactionClient
from airsensors.transports.base import Transport

LOGGER = logging.getLogger(__name__)

SGP30_ADDR = 0x58

CMD_GET_SERIAL_ID = bytes((0x36, 0x82))
CMD_GET_FEATURE_SET = bytes((0x20, 0x2F))
CMD_INIT_AIR_QUALITY = bytes((0x20, 0x03))
CMD_MEASURE_AIR_QUALITY = bytes((0x20, 0x08))
CMD_GET_BASELINE = bytes((0x20, 0x15))
CMD_SET_BASELINE = bytes((0x20, 0x1E))

MEASURE_DELAY_S = 0.010


class SGP30:
    """SGP30 handle.

    Construction reads the serial number and, when ``baseline_file`` is given,
    restores the stored baseline (a missing file is a cold start). After that,
    :meth:`read_air_quality` saves the baseline every ``baseline_interval_s``.

    :meth:`start_measurements` must have been sent before reading air quality;
    for the first 15 s after it the sensor reports 400 ppm and 0 ppb.
    """

    def __init__(
        self,
        transport: Transport,
        baseline_file: str | os.PathLike[str] | None = None,
        baseline_interval_s: float = DEFAULT_INTERVAL_S,
        *,
        address: int = SGP30_ADDR,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = TransactionClient(transport, address, sleep=sleep)
        self.serial_number = self.get_serial_number()
        LOGGER.info("SGP30 serial number %012X", self.serial_number)

        self.baseline_store: BaselineStore | None = None
        if baseline_file:
            self.baseline_store = BaselineStore(baseline_file, baseline_interval_s, clock=clock)
            baseline = self.baseline_store.load()
            if baseline is not None:
                self.set_baseline(baseline)
                LOGGER.info("Restored baseline %s from %s", baseline.raw.hex(), baseline_file)

    def get_serial_number(self) -> int:
        """Return the 48 bit serial number."""
        data = self.client.immediate(CMD_GET_SERIAL_ID, 9, context="reading serial number")
        require_crc8_groups(data, context="serial number")
        return (word(data, 0) << 32) | (word(data, 3) << 16) | word(data, 6)

    def get_features(self) -> FeatureSet:
        data = self.client.immediate(CMD_GET_FEATURE_SET, 3, context="reading features")
        require_crc8_groups(data, context="features")
        return FeatureSet(product_type=data[0], product_version=data[1])

    def start_measurements(self) -> None:
        """Send Init Air Quality; safe to repeat."""
        self.client.immediate(CMD_INIT_AIR_QUALITY, 0, context="starting air quality measurements")

    def read_air_quality(self) -> AirQuality:
        """Return CO2 in ppm and TVOC in ppb.

        Should be called once a second after :meth:`start_measurements`. When a
        baseline file is configured and the save interval has elapsed, the
        baseline is read and written to it; a failed read of the baseline
        raises here, a failed file write is only logged.
        """
        data = self.client.delayed(
            CMD_MEASURE_AIR_QUALITY,
            6,
            MEASURE_DELAY_S,
            context="air quality",
        )
        require_crc8_groups(data, context="read air quality")
        reading = AirQuality(co2_ppm=word(data, 0), tvoc_ppb=word(data, 3))

        store = self.baseline_store
        if store is not None and store.is_due():
            store.save(self.read_baseline())

        return reading

    def read_baseline(self) -> Baseline:
        """Return the current baseline, to be restored later with :meth:`set_baseline`."""
        data = self.client.immediate(CMD_GET_BASELINE, BASELINE_SIZE, context="reading baseline")
        require_crc8_groups(data, context="baseline")
        return Baseline(raw=data)

    def set_baseline(self, baseline: Baseline | bytes) -> None:
        """Write a baseline previously returned by :meth:`read_baseline`.

        Raw bytes are taken in read order (CO2, TVOC); the sensor expects them
        swapped, which :meth:`Baseline.wire_bytes` takes care of. Measurements
        are (re)started first since the sensor ignores the baseline otherwise.
        """
        if not isinstance(baseline, Baseline):
            baseline = Baseline.from_bytes(baseline)
        self.start_measurements()
        self.client.immediate(
            CMD_SET_BASELINE + baseline.wire_bytes(),
            0,
            context="setting baseline",
        )
