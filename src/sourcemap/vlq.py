"""Base64 VLQ codec used by the Source Map v3 ``mappings`` field."""

from __future__ import annotations

_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_INDEX = {ch: i for i, ch in enumerate(_BASE64)}

_SHIFT = 5
_MASK = (1 << _SHIFT) - 1
_CONTINUATION = 1 << _SHIFT


def encode_vlq(value: int) -> str:
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1
    out: list[str] = []
    while True:
        digit = vlq & _MASK
        vlq >>= _SHIFT
        if vlq:
            digit |= _CONTINUATION
        out.append(_BASE64[digit])
        if not vlq:
            break
    return "".join(out)


def encode_segment(values: list[int] | tuple[int, ...]) -> str:
    return "".join(encode_vlq(v) for v in values)


def decode_segment(segment: str) -> list[int]:
    """Decode one comma-free mappings segment into its integer fields."""
    values: list[int] = []
    shift = 0
    accum = 0
    for ch in segment:
        try:
            digit = _BASE64_INDEX[ch]
        except KeyError as exc:
            msg = f"Invalid base64 VLQ character {ch!r}"
            raise ValueError(msg) from exc
        accum += (digit & _MASK) << shift
        if digit & _CONTINUATION:
            shift += _SHIFT
            continue
        negative = accum & 1
        accum >>= 1
        values.append(-accum if negative else accum)
        accum = 0
        shift = 0
    if shift:
        msg = f"Truncated VLQ segment {segment!r}"
        raise ValueError(msg)
    return values


__all__ = ["decode_segment", "encode_segment", "encode_vlq"]
