"""Common vocabulary of processing segments: fields, errors and descriptions."""

from __future__ import annotations

import abc
import enum
from array import array
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .buffer import Buffer

MONO = 0
LEFT = 0
RIGHT = 1

_BUFFER_DESCRIPTION = "The buffer for audio data attached to the location."
_BYPASS_DESCRIPTION = "Bypass the segment's processing."
_SAMPLERATE_DESCRIPTION = "The samplerate at which the segment operates."


class SegmentError(Exception):
    """Base class of errors raised by segments."""


class InvalidFieldError(SegmentError):
    """The segment does not support the requested field."""


class InvalidLocationError(SegmentError, IndexError):
    """The location (port index) is out of range for the segment."""


class InvalidValueError(SegmentError, ValueError):
    """The value is not acceptable for the field."""


class BufferMissingError(SegmentError):
    """A buffer the segment needs has not been attached."""


class BufferAllocatedError(SegmentError):
    """A buffer that must be unallocated already owns storage."""


class Field(enum.Enum):
    """Fields that segments can expose."""

    BUFFER = enum.auto()
    BYPASS = enum.auto()
    VOLUME = enum.auto()
    SAMPLERATE = enum.auto()
    MIX = enum.auto()
    DELAY_TIME = enum.auto()
    FADE_FROM = enum.auto()
    FADE_TO = enum.auto()
    FADE_TIME = enum.auto()
    FADE_TYPE = enum.auto()
    GATE_OPEN_THRESHOLD = enum.auto()
    GATE_CLOSE_THRESHOLD = enum.auto()
    GATE_ATTACK = enum.auto()
    GATE_HOLD = enum.auto()
    GATE_RELEASE = enum.auto()
    GENERATOR_FREQUENCY = enum.auto()
    GENERATOR_TYPE = enum.auto()
    NOISE_TYPE = enum.auto()
    QUANTIZE_STEPS = enum.auto()


class Access(enum.Flag):
    """Where a field applies and how it may be accessed."""

    IN = enum.auto()
    OUT = enum.auto()
    SEGMENT = enum.auto()
    SET = enum.auto()
    GET = enum.auto()


@dataclass(frozen=True)
class FieldInfo:
    """Description of one field a segment supports."""

    field: Field
    value_type: type
    count: int
    access: Access
    description: str


@dataclass(frozen=True)
class SegmentInfo:
    """Description of a segment; ``None`` port counts mean unbounded."""

    name: str
    description: str
    min_inputs: int
    max_inputs: Optional[int]
    outputs: Optional[int]
    fields: Tuple[FieldInfo, ...] = ()
    inplace: bool = False
    modifies_input: bool = False


class Segment(abc.ABC):
    """A unit of audio processing connected to buffers."""

    _running = False

    def start(self) -> None:
        """Prepare for a run of mix calls."""
        self._running = True

    @abc.abstractmethod
    def mix(self) -> None:
        """Process as many samples as the connected buffers allow."""

    def end(self) -> None:
        """Finish a run of mix calls."""
        self._running = False

    @abc.abstractmethod
    def info(self) -> SegmentInfo:
        """Describe the segment."""

    def set_in(self, field: Field, location: int, value: Any) -> None:
        """Set a field of an input port."""
        raise InvalidFieldError(field)

    def set_out(self, field: Field, location: int, value: Any) -> None:
        """Set a field of an output port."""
        raise InvalidFieldError(field)

    def get(self, field: Field) -> Any:
        """Read a segment-wide field."""
        raise InvalidFieldError(field)

    def set(self, field: Field, value: Any) -> None:
        """Change a segment-wide field."""
        raise InvalidFieldError(field)

    @staticmethod
    def _expect_buffer(field: Field, location: int, slots: int = 1) -> None:
        if field is not Field.BUFFER:
            raise InvalidFieldError(field)
        if not 0 <= location < slots:
            raise InvalidLocationError(location)

    @staticmethod
    def _require(*buffers: Optional[Buffer]) -> None:
        if any(buffer is None for buffer in buffers):
            raise BufferMissingError(Field.BUFFER)

    @staticmethod
    def _fill_silence(buffer: Buffer) -> None:
        area = buffer.request_write()
        area[:] = array("f", bytes(4 * len(area)))
        buffer.finish_write(len(area))

    @staticmethod
    def _buffer_field(access: Access) -> FieldInfo:
        return FieldInfo(Field.BUFFER, Buffer, 1, access | Access.SET, _BUFFER_DESCRIPTION)

    @staticmethod
    def _segment_field(field: Field, value_type: type, description: str) -> FieldInfo:
        access = Access.SEGMENT | Access.SET | Access.GET
        return FieldInfo(field, value_type, 1, access, description)

    @classmethod
    def _bypass_field(cls) -> FieldInfo:
        return cls._segment_field(Field.BYPASS, bool, _BYPASS_DESCRIPTION)

    @classmethod
    def _samplerate_field(cls) -> FieldInfo:
        return cls._segment_field(Field.SAMPLERATE, int, _SAMPLERATE_DESCRIPTION)