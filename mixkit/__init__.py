"""Audio processing segments (distribute, quantize, gate, generator, noise) over float ring buffers."""

__version__ = "0.1.0"

__all__ = [
    "buffer",
    "segment",
    "distribute",
    "quantize",
    "gate",
    "generator",
    "noise",
]