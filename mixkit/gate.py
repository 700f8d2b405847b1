"""Noise gate segment that silences audio below a volume threshold."""

from __future__ import annotations

import enum
import math
from array import array
from typing import Any, Optional

from .buffer import Buffer, transfer, transfer_samples
from .segment import (
    Access,
    BufferMissingError,
    Field,
    FieldInfo,
    InvalidFieldError,
    InvalidValueError,
    Segment,
    SegmentInfo,
)


class GateState(enum.Enum):
    """Phases of the gate's envelope."""

    CLOSED = 1
    ATTACKING = 2
    OPEN = 3
    HOLDING = 4
    RELEASING = 5


def db_to_linear(db: float) -> float:
    """Convert a level in decibels to a linear amplitude."""
    return 10.0 ** (db / 20.0)


def linear_to_db(linear: float) -> float:
    """Convert a linear amplitude to a level in decibels."""
    return math.log10(linear) * 20.0


def _non_negative(field: Field, value: Any) -> float:
    if value < 0:
        raise InvalidValueError(f"{field.name} must not be negative, got {value}")
    return float(value)


class GateSegment(Segment):
    """Opens when the signal reaches the open threshold, closes below the close threshold.

    Opening ramps the volume up over ``attack`` seconds; after the signal falls
    below the close threshold the gate stays open for ``hold`` seconds and then
    ramps down over ``release`` seconds.
    """

    def __init__(self, samplerate: int):
        self._samplerate = int(samplerate)
        self._open_threshold = db_to_linear(-24.0)
        self._close_threshold = db_to_linear(-32.0)
        self._attack = 0.025
        self._hold = 0.2
        self._release = 0.15
        self._time = 0.0
        self._state = GateState.CLOSED
        self._input: Optional[Buffer] = None
        self._output: Optional[Buffer] = None
        self._bypass = False

    @property
    def state(self) -> GateState:
        """The current phase of the gate."""
        return self._state

    def start(self) -> None:
        self._time = 0.0
        if self._input is None or self._output is None:
            raise BufferMissingError(Field.BUFFER)

    def mix(self) -> None:
        if self._input is None or self._output is None:
            raise BufferMissingError(Field.BUFFER)
        if self._bypass:
            transfer(self._input, self._output)
            return
        stime = 1.0 / self._samplerate
        time = self._time
        open_level = self._open_threshold
        close_level = self._close_threshold
        attack = self._attack
        hold = self._hold
        release = self._release
        state = self._state
        volume = 1.0
        with transfer_samples(self._input, self._output) as (inp, out):
            gated = []
            for sample in inp:
                if state is GateState.CLOSED:
                    volume = 0.0
                    if open_level <= sample:
                        time = 0.0
                        state = GateState.ATTACKING
                elif state is GateState.ATTACKING:
                    if attack < time:
                        state = GateState.OPEN
                    else:
                        volume = time / attack
                        time += stime
                elif state is GateState.OPEN:
                    if sample < close_level:
                        time = hold
                        state = GateState.HOLDING
                elif state is GateState.HOLDING:
                    if open_level <= sample:
                        state = GateState.OPEN
                    elif time <= 0:
                        time = release
                        state = GateState.RELEASING
                    else:
                        time -= stime
                elif state is GateState.RELEASING:
                    if open_level <= sample:
                        volume = time / release
                        time = time / release * attack
                        state = GateState.ATTACKING
                    elif time <= 0:
                        volume = 0.0
                        time = 0.0
                        state = GateState.CLOSED
                    else:
                        volume = time / release
                        time -= stime
                gated.append(sample * volume)
            out[:] = array("f", gated)
        self._state = state
        self._time = time

    def info(self) -> SegmentInfo:
        settable = Access.SEGMENT | Access.SET | Access.GET
        return SegmentInfo(
            name="gate",
            description="A noise gate segment to filter out low-volume frequencies.",
            min_inputs=1,
            max_inputs=1,
            outputs=1,
            inplace=True,
            fields=(
                FieldInfo(
                    Field.BUFFER,
                    Buffer,
                    1,
                    Access.IN | Access.OUT | Access.SET,
                    "The buffer for audio data attached to the location.",
                ),
                FieldInfo(
                    Field.GATE_OPEN_THRESHOLD,
                    float,
                    1,
                    settable,
                    "The volume in dB necessary to open the gate.",
                ),
                FieldInfo(
                    Field.GATE_CLOSE_THRESHOLD,
                    float,
                    1,
                    settable,
                    "The volume in dB below which the gate is closed again.",
                ),
                FieldInfo(
                    Field.GATE_ATTACK,
                    float,
                    1,
                    settable,
                    "The time during which the output volume is scaled up.",
                ),
                FieldInfo(
                    Field.GATE_HOLD,
                    float,
                    1,
                    settable,
                    "The time during which the output is still transmitted "
                    "despite the gate being closed.",
                ),
                FieldInfo(
                    Field.GATE_RELEASE,
                    float,
                    1,
                    settable,
                    "The time during which the output volume is scaled down.",
                ),
                FieldInfo(
                    Field.SAMPLERATE,
                    int,
                    1,
                    settable,
                    "The samplerate at which the segment operates.",
                ),
                FieldInfo(Field.BYPASS, bool, 1, settable, "Bypass the segment's processing."),
            ),
        )

    def set_in(self, field: Field, location: int, value: Optional[Buffer]) -> None:
        self._expect_buffer(field, location)
        self._input = value

    def set_out(self, field: Field, location: int, value: Optional[Buffer]) -> None:
        self._expect_buffer(field, location)
        self._output = value

    def get(self, field: Field) -> Any:
        if field is Field.GATE_OPEN_THRESHOLD:
            return linear_to_db(self._open_threshold)
        if field is Field.GATE_CLOSE_THRESHOLD:
            return linear_to_db(self._close_threshold)
        if field is Field.GATE_ATTACK:
            return self._attack
        if field is Field.GATE_HOLD:
            return self._hold
        if field is Field.GATE_RELEASE:
            return self._release
        if field is Field.SAMPLERATE:
            return self._samplerate
        if field is Field.BYPASS:
            return self._bypass
        raise InvalidFieldError(field)

    def set(self, field: Field, value: Any) -> None:
        if field is Field.SAMPLERATE:
            if value <= 0:
                raise InvalidValueError(f"samplerate must be positive, got {value}")
            self._samplerate = int(value)
        elif field is Field.GATE_OPEN_THRESHOLD:
            self._open_threshold = db_to_linear(value)
        elif field is Field.GATE_CLOSE_THRESHOLD:
            self._close_threshold = db_to_linear(value)
        elif field is Field.GATE_ATTACK:
            self._attack = _non_negative(field, value)
        elif field is Field.GATE_HOLD:
            self._hold = _non_negative(field, value)
        elif field is Field.GATE_RELEASE:
            self._release = _non_negative(field, value)
        elif field is Field.BYPASS:
            self._bypass = bool(value)
        else:
            raise InvalidFieldError(field)