"""Segment that lets several consumers read the same input buffer."""

from __future__ import annotations

from typing import List, Optional

from .buffer import Buffer
from .segment import (
    Access,
    BufferAllocatedError,
    Field,
    InvalidFieldError,
    InvalidLocationError,
    Segment,
    SegmentInfo,
)


class DistributeSegment(Segment):
    """Multiplexes one buffer into virtual output buffers.

    Outputs share the input's storage.  On each mix the input is advanced by
    the amount the slowest consumer has read, and every output is reset to
    the input's cursors.
    """

    def __init__(self) -> None:
        self._input: Optional[Buffer] = None
        self._outputs: List[Buffer] = []
        self._was_available = 0

    def set_in(self, field: Field, location: int, value: Optional[Buffer]) -> None:
        self._expect_buffer(field, location)
        self._input = value

    def set_out(self, field: Field, location: int, value: Optional[Buffer]) -> None:
        if field is not Field.BUFFER:
            raise InvalidFieldError(field)
        if value is None:
            if not 0 <= location < len(self._outputs):
                raise InvalidLocationError(location)
            self._outputs.pop(location)._release()
            return
        if value.size:
            raise BufferAllocatedError(location)
        value.virtual = True
        if location < len(self._outputs):
            self._outputs[location] = value
        else:
            self._outputs.append(value)

    def _source(self) -> Buffer:
        self._require(self._input)
        assert self._input is not None
        return self._input

    def _mirror(self, source: Buffer) -> None:
        for output in self._outputs:
            output.share_from(source)

    def start(self) -> None:
        self._mirror(self._source())
        self._was_available = 0
        super().start()

    def mix(self) -> None:
        source = self._source()
        slowest = max(
            (output.available_read() for output in self._outputs),
            default=self._was_available,
        )
        consumed = self._was_available - slowest
        if consumed > 0:
            source.finish_read(consumed)
        self._was_available = source.available_read()
        self._mirror(source)

    def info(self) -> SegmentInfo:
        return SegmentInfo(
            name="distribute",
            description="Multiplexes a buffer to multiple outputs to consume it from.",
            min_inputs=1,
            max_inputs=1,
            outputs=None,
            fields=(self._buffer_field(Access.IN | Access.OUT),),
        )