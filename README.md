# mixkit

Small, composable audio processing building blocks. Audio flows through
`mixkit.buffer.Buffer` objects, ring buffers of 32-bit float samples, and is
produced, consumed or transformed by segments.

## Buffers

`Buffer(size)` hands out contiguous regions as `memoryview`s:

- `request_write(count=None)` / `finish_write(count)` to produce samples,
- `request_read(count=None)` / `finish_read(count)` to consume them,
- `available_read()` / `available_write()` for the size of the next region,
- `clear()`, `resize(size)` and `share_from(other)`.

Committing more than is available raises `ValueError`. The module also offers
`transfer(source, target)` (move samples), `copy(source, target)` (copy without
consuming) and the context manager `transfer_samples(source, target)`, which
yields matching input and output views and commits both on exit.

## Segments

All segments derive from `mixkit.segment.Segment` and share `start()`,
`mix()`, `end()`, `info()`, `get(field)`, `set(field, value)`,
`set_in(field, location, value)` and `set_out(field, location, value)`.
Fields are members of `Field`; `info()` returns a `SegmentInfo` with
`FieldInfo` entries describing inputs, outputs and fields.

- `mixkit.distribute.DistributeSegment` shares one input buffer among any
  number of outputs. Outputs must be empty buffers (`Buffer(0)`); they become
  views on the input, which is advanced by what the slowest output has read.
- `mixkit.quantize.QuantizeSegment(steps)` rounds samples down to multiples of
  `1 / steps`, blended with the input by `Field.MIX`; a mix of 0 bypasses it.
- `mixkit.gate.GateSegment(samplerate)` is a noise gate with open and close
  thresholds in dB, attack, hold and release times; its `state` property gives
  the current `GateState`. `db_to_linear` and `linear_to_db` convert levels.
- `mixkit.generator.GeneratorSegment(wave_type, frequency, samplerate)`
  produces sine, square, triangle or sawtooth waves (`WaveType`) at a default
  volume of 0.8. The wave functions `sine_wave`, `square_wave`,
  `triangle_wave` and `sawtooth_wave` are available on their own.
- `mixkit.noise.NoiseSegment(noise_type, rng=None)` produces white, pink or
  brown noise (`NoiseType`), drawing from the given `random.Random`.

## Example

```python
from mixkit.buffer import Buffer
from mixkit.segment import Field
from mixkit.generator import GeneratorSegment, WaveType
from mixkit.quantize import QuantizeSegment

source = Buffer(512)
stepped = Buffer(512)

tone = GeneratorSegment(WaveType.SINE, 440, 44100)
tone.set_out(Field.BUFFER, 0, source)

quantize = QuantizeSegment(8)
quantize.set_in(Field.BUFFER, 0, source)
quantize.set_out(Field.BUFFER, 0, stepped)

for segment in (tone, quantize):
    segment.start()
tone.mix()
quantize.mix()

samples = stepped.request_read(512)
stepped.finish_read(len(samples))
```

## Errors

Segments raise subclasses of `SegmentError`: `InvalidFieldError`,
`InvalidLocationError`, `InvalidValueError`, `BufferMissingError` and
`BufferAllocatedError`.

## What it does not do

mixkit only processes samples held in memory. It does not read or write audio
files, convert between sample encodings, resample, or play or record through
sound devices. It has no delay or fade effect and no ready-made segment that
writes silence or discards input; those have to be built on `Segment`.

## Running the tests

```
pip install -e .[test]
pytest
```