from dataclasses import FrozenInstanceError

import pytest

from mixkit.segment import (
    Access,
    Field,
    FieldInfo,
    InvalidFieldError,
    Segment,
    SegmentError,
    SegmentInfo,
)


class Counter(Segment):
    def __init__(self):
        self.seen = []

    def mix(self):
        self.seen.append(self._running)

    def info(self):
        return SegmentInfo("counter", "Counts mix calls.", 0, 0, 0)


def test_segment_is_abstract():
    with pytest.raises(TypeError):
        Segment()


def test_lifecycle_tracks_running():
    counter = Counter()
    counter.mix()
    Segment.start(counter)
    counter.mix()
    counter.mix()
    Segment.end(counter)
    counter.mix()
    assert counter.seen == [False, True, True, False]


@pytest.mark.parametrize(
    "method, args, field",
    [
        ("get", (Field.VOLUME,), Field.VOLUME),
        ("set", (Field.VOLUME, 1.0), Field.VOLUME),
        ("set_in", (Field.BUFFER, 0, None), Field.BUFFER),
        ("set_out", (Field.BUFFER, 0, None), Field.BUFFER),
    ],
)
def test_unsupported_fields_raise(method, args, field):
    with pytest.raises(InvalidFieldError) as excinfo:
        getattr(Counter(), method)(*args)
    assert isinstance(excinfo.value, SegmentError)
    assert excinfo.value.args[0] == field


def test_info_defaults():
    info = SegmentInfo("counter", "Counts mix calls.", 0, 0, 0)
    assert info.name == "counter"
    assert info.description == "Counts mix calls."
    assert info.fields == ()
    assert (info.inplace, info.modifies_input) == (False, False)


def test_field_info_is_immutable():
    entry = FieldInfo(Field.VOLUME, float, 1, Access.SEGMENT | Access.SET, "volume")
    with pytest.raises(FrozenInstanceError):
        entry.count = 2
    assert Access.SET in entry.access
    assert Access.GET not in entry.access