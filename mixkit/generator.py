"""Source segment that generates periodic wave forms."""

from __future__ import annotations

import enum
import math
from array import array
from typing import Any, Callable, Dict, Optional

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


class WaveType(enum.Enum):
    """Wave forms the generator can produce."""

    SINE = enum.auto()
    SQUARE = enum.auto()
    TRIANGLE = enum.auto()
    SAWTOOTH = enum.auto()


def _period(frequency: float, samplerate: float) -> float:
    return samplerate / frequency if frequency else math.inf


def sine_wave(frequency: float, phase: float, samplerate: float) -> float:
    """Sine wave value at sample ``phase``."""
    return math.sin(2 * math.pi * frequency * phase / samplerate)


def square_wave(frequency: float, phase: float, samplerate: float) -> float:
    """Square wave value at sample ``phase``: 1 in the first half period, -1 after."""
    length = _period(frequency, samplerate)
    return 1.0 if math.fmod(phase, length) < length / 2 else -1.0


def triangle_wave(frequency: float, phase: float, samplerate: float) -> float:
    """Triangle wave value at sample ``phase``, rising from -1 to 1 and back."""
    length = _period(frequency, samplerate)
    position = math.fmod(phase, length) / length
    folded = 1.0 - position if 0.5 < position else position
    return folded * 4.0 - 1.0


def sawtooth_wave(frequency: float, phase: float, samplerate: float) -> float:
    """Sawtooth wave value at sample ``phase``, rising from -1 to 1."""
    length = _period(frequency, samplerate)
    return math.fmod(phase, length) / length * 2.0 - 1.0


_WAVES: Dict[WaveType, Callable[[float, float, float], float]] = {
    WaveType.SINE: sine_wave,
    WaveType.SQUARE: square_wave,
    WaveType.TRIANGLE: triangle_wave,
    WaveType.SAWTOOTH: sawtooth_wave,
}


def _wave_type(value: Any) -> WaveType:
    try:
        return WaveType(value)
    except ValueError:
        raise InvalidValueError(f"unknown wave type {value!r}") from None


class GeneratorSegment(Segment):
    """Fills its output buffer with a wave of the given type and frequency."""

    def __init__(self, wave_type: WaveType, frequency: float, samplerate: int):
        if samplerate <= 0:
            raise InvalidValueError(f"samplerate must be positive, got {samplerate}")
        self._type = _wave_type(wave_type)
        self._frequency = float(frequency)
        self._samplerate = int(samplerate)
        self._phase = 0
        self._volume = 0.8
        self._output: Optional[Buffer] = None

    def start(self) -> None:
        if self._output is None:
            raise BufferMissingError(Field.BUFFER)

    def mix(self) -> None:
        if self._output is None:
            raise BufferMissingError(Field.BUFFER)
        wave = _WAVES[self._type]
        frequency = self._frequency
        samplerate = self._samplerate
        volume = self._volume
        phase = self._phase
        area = self._output.request_write()
        samples = []
        for _ in range(len(area)):
            samples.append(wave(frequency, phase, samplerate) * volume)
            phase = (phase + 1) % samplerate
        area[:] = array("f", samples)
        self._output.finish_write(len(area))
        self._phase = phase

    def info(self) -> SegmentInfo:
        settable = Access.SEGMENT | Access.SET | Access.GET
        return SegmentInfo(
            name="generator",
            description="Wave generator source segment",
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
                    Field.GENERATOR_FREQUENCY,
                    float,
                    1,
                    settable,
                    "The frequency in Hz of the generated tone.",
                ),
                FieldInfo(
                    Field.GENERATOR_TYPE,
                    WaveType,
                    1,
                    settable,
                    "The type of wave form that is produced.",
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
        if field is Field.GENERATOR_FREQUENCY:
            return self._frequency
        if field is Field.GENERATOR_TYPE:
            return self._type
        raise InvalidFieldError(field)

    def set(self, field: Field, value: Any) -> None:
        if field is Field.VOLUME:
            self._volume = float(value)
        elif field is Field.GENERATOR_FREQUENCY:
            if value < 0 or self._samplerate < value:
                raise InvalidValueError(
                    f"frequency must lie within [0, {self._samplerate}], got {value}"
                )
            self._frequency = float(value)
        elif field is Field.GENERATOR_TYPE:
            self._type = _wave_type(value)
        else:
            raise InvalidFieldError(field)