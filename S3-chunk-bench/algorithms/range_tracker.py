"""
Range bookkeeping for sequential chunked downloads.

Progress through an object is tracked purely from the Content-Range the
store sends back: the returned ``end`` and the authoritative total
``length`` decide both where the next request starts and whether the
object has been fully retrieved. There is no separate byte counter and
no HEAD request up front.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from common.errors import MalformedRangeHeader
from configuration import BYTES_PER_MB

RANGE_UNIT_PREFIX = "bytes "


@dataclass(frozen=True)
class RangeAndLength:
    """Range actually returned by the store plus the object's total length."""

    start: int
    end: int
    length: int


# None means no request has been answered yet
RangeState = Optional[RangeAndLength]


def _parse_int(header: str, value: str, name: str) -> int:
    # Plain ASCII digits only: no sign, underscores or padding
    if not (value.isascii() and value.isdigit()):
        raise MalformedRangeHeader(header, f"{name} is not an integer: {value!r}")
    return int(value)


def parse_content_range(header: Optional[str]) -> RangeAndLength:
    """Parse ``"<start>-<end>/<length>"`` into a RangeAndLength.

    S3 sends the RFC 7233 form with a unit prefix (``"bytes 0-99/1000"``),
    which is accepted as well.

    Raises:
        MalformedRangeHeader: If the header is missing, does not contain
            exactly one ``/`` and one ``-`` in the range part, has a
            non-integer component, or describes an impossible range.
    """
    if not header:
        raise MalformedRangeHeader(header, "header is missing")

    value = header.strip()
    if value.startswith(RANGE_UNIT_PREFIX):
        value = value[len(RANGE_UNIT_PREFIX):].strip()

    parts = value.split("/")
    if len(parts) != 2:
        raise MalformedRangeHeader(header, "expected exactly one '/'")
    range_part, length_part = parts

    bounds = range_part.split("-")
    if len(bounds) != 2:
        raise MalformedRangeHeader(header, "expected exactly one '-' in the range")

    start = _parse_int(header, bounds[0], "start")
    end = _parse_int(header, bounds[1], "end")
    length = _parse_int(header, length_part, "length")

    if not 0 <= start <= end < length:
        raise MalformedRangeHeader(header, "range does not satisfy 0 <= start <= end < length")

    return RangeAndLength(start=start, end=end, length=length)


def is_complete(state: RangeState) -> bool:
    """True once the last returned byte is the last byte of the object."""
    if state is None:
        return False
    return state.end == state.length - 1


def chunk_size_bytes(chunk_size_mb: float) -> float:
    """Convert a (possibly fractional) chunk size in MB to bytes."""
    return chunk_size_mb * BYTES_PER_MB


def next_range(state: RangeState, chunk_bytes: float) -> Tuple[int, int]:
    """Compute the inclusive byte range of the next request.

    The end is rounded up, so fractional chunk sizes never produce an
    empty range. The final request may ask for bytes past the end of the
    object; the store clamps it and reports the real length.
    """
    if chunk_bytes <= 0:
        raise ValueError(f"Chunk size must be positive, got {chunk_bytes} bytes")

    previous_end = -1 if state is None else state.end
    start = previous_end + 1
    end = max(start, math.ceil(previous_end + chunk_bytes))
    return start, end
