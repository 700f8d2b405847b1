"""Source segment that generates white, pink or brown noise."""

from __future__ import annotations

import enum
import random
from array import array
from typing import Any, Callable, Dict, List, Optional

from .buffer import Buffer
from .segment import (
    MONO,
    Access,
    BufferMissingError,
    Field,
    FieldInfo,
    InvalidFieldError,
    InvalidLocationError,
    InvalidValueError,
    Segment,
    SegmentInfo,
)

_PINK_ROWS = 30
_PINK_RANGE = 67108864


class NoiseType(enum.Enum):
    """Colours of noise the segment can produce."""

    WHITE = enum.auto()
    PINK = enum.auto()
    BROWN = enum.auto()


def _noise_type(value: Any) -> NoiseType:
    try:
        return NoiseType(value)
    except ValueError:
        raise InvalidValueError(f"unknown noise type {value!r}") from None


class NoiseSegment(Segment):
    """Fills its output buffer with noise drawn from ``rng``."""

    def __init__(self, noise_type: NoiseType, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random()
        self._type = _noise_type(noise_type)
        self._volume = 1.0
        self._output: Optional[Buffer] = None
        self._pink_rows: List[int] = [0] * _PINK_ROWS
        self._pink_running_sum = 0
        self._pink_index = 0
        self._pink_index_mask = (1 << _PINK_ROWS) - 1
        self._pink_scalar = 1.0 / ((_PINK_ROWS + 1) * (1 << 23))
        self._brown = 0.0
        self._generators: Dict[NoiseType, Callable[[], float]] = {
            NoiseType.WHITE: self._white,
            NoiseType.PINK: self._pink,
            NoiseType.BROWN: self._brown_sample,
        }

    def _white(self) -> float:
        return self._rng.random() * 2.0 - 1.0

    def _pink_random(self) -> int:
        return int((self._rng.random() - 0.5) * _PINK_RANGE)

    def _pink(self) -> float:
        self._pink_index = (self._pink_index + 1) & self._pink_index_mask
        if self._pink_index != 0:
            index = self._pink_index
            zeroes = (index & -index).bit_length() - 1
            value = self._pink_random()
            self._pink_running_sum += value - self._pink_rows[zeroes]
            self._pink_rows[zeroes] = value
        total = self._pink_running_sum + self._pink_random()
        return self._pink_scalar * total

    def _brown_sample(self) -> float:
        self._brown += self._rng.random() * 2.0 - 1.0
        self._brown -= self._brown * 0.03125
        return self._brown * 0.0625

    def start(self) -> None:
        if self._output is None:
            raise BufferMissingError(Field.BUFFER)

    def mix(self) -> None:
        if self._output is None:
            raise BufferMissingError(Field.BUFFER)
        noise = self._generators[self._type]
        volume = self._volume
        area = self._output.request_write()
        area[:] = array("f", (noise() * volume for _ in range(len(area))))
        self._output.finish_write(len(area))

    def info(self) -> SegmentInfo:
        settable = Access.SEGMENT | Access.SET | Access.GET
        return SegmentInfo(
            name="noise",
            description="Noise generator segment",
            min_inputs=0,
            max_inputs=0,
            outputs=1,
            fields=(
                FieldInfo(
                    Field.BUFFER,
                    Buffer,
                    1,
                    Access.OUT | Access.SET,
                    "The buffer for audio data attached to the location.",
                ),
                FieldInfo(Field.VOLUME, float, 1, settable, "The volume scaling factor."),
                FieldInfo(
                    Field.NOISE_TYPE,
                    NoiseType,
                    1,
                    settable,
                    "The type of noise that is produced.",
                ),
            ),
        )

    def set_out(self, field: Field, location: int, value: Optional[Buffer]) -> None:
        if field is not Field.BUFFER:
            raise InvalidFieldError(field)
        if location != MONO:
            raise InvalidLocationError(location)
        self._output = value

    def get(self, field: Field) -> Any:
        if field is Field.VOLUME:
            return self._volume
        if field is Field.NOISE_TYPE:
            return self._type
        raise InvalidFieldError(field)

    def set(self, field: Field, value: Any) -> None:
        if field is Field.VOLUME:
            self._volume = float(value)
        elif field is Field.NOISE_TYPE:
            self._type = _noise_type(value)
        else:
            raise InvalidFieldError(field)