"""Segment that quantizes its input to a number of steps."""

from __future__ import annotations

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


def _steps(value: Any) -> int:
    steps = int(value)
    if steps < 1:
        raise InvalidValueError(f"quantize steps must be positive, got {value}")
    return steps


class QuantizeSegment(Segment):
    """Rounds samples down to multiples of ``1 / steps``, blended by ``mix``."""

    def __init__(self, steps: int):
        self._steps = _steps(steps)
        self._mix = 1.0
        self._input: Optional[Buffer] = None
        self._output: Optional[Buffer] = None
        self._bypass = False

    def start(self) -> None:
        if self._input is None or self._output is None:
            raise BufferMissingError(Field.BUFFER)

    def mix(self) -> None:
        if self._input is None or self._output is None:
            raise BufferMissingError(Field.BUFFER)
        if self._bypass:
            transfer(self._input, self._output)
            return
        steps = self._steps
        amount = self._mix
        with transfer_samples(self._input, self._output) as (inp, out):
            out[:] = array(
                "f",
                (
                    s * (1.0 - amount) + (math.floor(s * steps) / steps) * amount
                    for s in inp
                ),
            )

    def info(self) -> SegmentInfo:
        settable = Access.SEGMENT | Access.SET | Access.GET
        return SegmentInfo(
            name="quantize",
            description="Quantize the signal to a specified number of intervals.",
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
                    Field.MIX, float, 1, settable, "How much of the output to mix with the input."
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
        if field is Field.MIX:
            return self._mix
        if field is Field.BYPASS:
            return self._bypass
        if field is Field.QUANTIZE_STEPS:
            return self._steps
        raise InvalidFieldError(field)

    def set(self, field: Field, value: Any) -> None:
        if field is Field.MIX:
            if not 0 <= value <= 1:
                raise InvalidValueError(f"mix must lie within [0, 1], got {value}")
            self._mix = float(value)
            self._bypass = self._mix == 0
        elif field is Field.BYPASS:
            self._bypass = bool(value)
        elif field is Field.QUANTIZE_STEPS:
            self._steps = _steps(value)
        else:
            raise InvalidFieldError(field)