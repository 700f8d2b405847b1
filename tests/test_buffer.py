import random
from array import array

import pytest

from mixkit.buffer import Buffer, copy, transfer, transfer_samples


def _random_samples(count, seed=7):
    rng = random.Random(seed)
    return array("f", (rng.uniform(-1000.0, 1000.0) for _ in range(count)))


def _fill(buffer, samples):
    area = buffer.request_write(len(samples))
    area[:] = samples
    buffer.finish_write(len(samples))


def _contents(buffer, count=None):
    area = buffer.request_read() if count is None else buffer.request_read(count)
    return area.tolist()


def _run(buffer, steps):
    """Run (method, *args) steps; request steps carry (count, expected length)."""
    for name, *args in steps:
        if name == "available":
            assert (buffer.available_read(), buffer.available_write()) == tuple(args)
        elif name.startswith("request_"):
            count, expected = args
            method = getattr(buffer, name)
            area = method() if count is None else method(count)
            assert len(area) == expected, (name, count)
        else:
            getattr(buffer, name)(*args)


def test_make():
    buffer = Buffer(1024)
    assert buffer.size == 1024
    assert (buffer.available_read(), buffer.available_write()) == (0, 1024)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Buffer(-1)


def test_write_allocation():
    buffer = Buffer(1024)
    for value, remaining in ((1.0, 512), (2.0, 0)):
        area = buffer.request_write(512)
        assert len(area) == 512
        area[:] = array("f", [value] * 512)
        buffer.finish_write(512)
        assert (buffer.available_write(), buffer.available_read()) == (remaining, 1024 - remaining)
    # The two regions were distinct.
    assert _contents(buffer) == [1.0] * 512 + [2.0] * 512
    assert len(buffer.request_write(512)) == 0


def test_full_read_write():
    buffer = Buffer(1024)
    area = buffer.request_write(1024)
    assert len(area) == 1024
    area[:] = _random_samples(1024)
    assert len(buffer.request_read(1024)) == 0
    buffer.finish_write(1024)
    first = _contents(buffer, 1024)
    assert len(first) == 1024
    assert _contents(buffer, 1024) == first
    buffer.finish_read(1024)
    with pytest.raises(ValueError):
        buffer.finish_read(1024)
    assert len(buffer.request_read(1024)) == 0


def test_partial_read_write():
    _run(
        Buffer(1024),
        [
            ("request_write", 512, 512),
            ("finish_write", 256),
            ("request_read", 256, 256),
            ("request_write", 512, 512),
            ("finish_read", 256),
            ("request_read", 256, 0),
            ("finish_write", 512),
            ("request_read", 256, 256),
            ("finish_read", 256),
            ("available", 256, 256),
        ],
    )


def test_read_bounds():
    _run(
        Buffer(1024),
        [
            ("request_write", 1024, 1024),
            ("finish_write", 1024),
            ("request_read", 1000, 1000),
            ("finish_read", 1000),
            ("request_read", 24, 24),
            ("finish_read", 24),
            ("request_write", 1024, 1024),
            ("finish_write", 1024),
            ("request_read", 200, 200),
            ("finish_read", 200),
            ("available", 824, 200),
        ],
    )


def test_bip_read_write():
    _run(
        Buffer(100),
        [
            ("request_write", None, 100),
            ("finish_write", 100),
            ("available", 100, 0),
            ("request_read", None, 100),
            ("finish_read", 50),
            ("available", 50, 50),
            ("request_write", None, 50),
            ("finish_write", 25),
            ("available", 50, 25),
            ("request_read", None, 50),
            ("finish_read", 25),
            ("available", 25, 50),
            ("request_write", None, 50),
            ("finish_write", 50),
            ("available", 25, 0),
            ("request_read", None, 25),
            ("finish_read", 25),
            ("available", 75, 25),
            ("request_read", None, 75),
            ("finish_read", 75),
            ("available", 0, 25),
        ],
    )


def test_finish_write_overflow_rejected():
    buffer = Buffer(16)
    with pytest.raises(ValueError):
        buffer.finish_write(17)
    assert buffer.available_read() == 0


@pytest.mark.parametrize("move, source_kept", [(transfer, False), (copy, True)])
def test_transfer_and_copy(move, source_kept):
    a, b = Buffer(1024), Buffer(1024)
    mem = _random_samples(1024).tolist()
    _fill(a, array("f", mem))
    assert move(a, b) == 1024
    assert _contents(b, 1024) == mem
    assert _contents(a, 1024) == (mem if source_kept else [])


def test_transfer_to_itself_keeps_contents():
    b = Buffer(1024)
    mem = _random_samples(1024).tolist()
    _fill(b, array("f", mem))
    transfer(b, b)
    assert _contents(b) == mem


def test_resize():
    buffer = Buffer(1024)
    buffer.request_write(512)
    buffer.finish_write(256)
    held_read = buffer.request_read(0)
    held_write = buffer.request_write(512)
    buffer.resize(2048)
    assert buffer.size == 2048
    assert (buffer.available_read(), buffer.available_write()) == (0, 2048)
    assert (len(held_read), len(held_write)) == (0, 512)


def test_with_transfer():
    a, b = Buffer(1024), Buffer(1024)
    mem = _random_samples(1024)
    _fill(a, mem)
    with transfer_samples(a, b) as (af, bf):
        assert af.tolist() == mem.tolist()
        bf[:] = af
    assert _contents(b, 1024) == mem.tolist()
    with transfer_samples(b, b) as (af, bf):
        assert af.tolist() == mem.tolist()
        for index, value in enumerate(af):
            bf[index] = value + 1
    assert _contents(b, 1024) == array("f", (value + 1 for value in mem)).tolist()


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_randomized(seed):
    rng = random.Random(seed)
    size = 1024
    buffer = Buffer(size)
    wptr = rptr = full = 0
    for _ in range(20000):
        avail = rng.randrange(size)
        writing = rng.randrange(2) == 0
        area = buffer.request_write(avail) if writing else buffer.request_read(avail)
        assert len(area) <= avail
        count = rng.randrange(len(area) + 1)
        if writing:
            buffer.finish_write(count)
            wptr = (wptr + count) % size
            full += count
        else:
            buffer.finish_read(count)
            rptr = (rptr + count) % size
            full -= count
        assert 0 <= full <= size
        got = len(buffer.request_read())
        if rptr < wptr:
            expected = (wptr - rptr, wptr - rptr, size - wptr)
        elif wptr < rptr:
            expected = (size - rptr, size - rptr, rptr - wptr)
        elif full == 0:
            expected = (0, 0, size - wptr)
        else:
            expected = (size - rptr, size - rptr, 0)
        assert (got, buffer.available_read(), buffer.available_write()) == expected


def test_share_from_sees_same_samples():
    real = Buffer(8)
    _fill(real, array("f", [0.5] * 8))
    view = Buffer(0)
    view.share_from(real)
    assert view.virtual is True
    assert view.size == real.size
    assert _contents(view) == [0.5] * 8
    view.finish_read(8)
    assert real.available_read() == 8