"""Pipeline steps.

Each module performs one step of turning ISOXML task data into clipped
swath lines: parsing, boundary conversion, extension, propagation,
clipping and per-pattern rendering.
"""
