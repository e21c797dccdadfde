"""Serialisation of voxel lists for the viewer and the runtime map loader.

Text format (one voxel per line, y and z swapped for the voxel editor):
    X Z Y ffffffff

Binary format (all little-endian):
    u32 count
    count * (u16 x, u16 y, u16 z)

Limitations:
  - Binary coordinates must fit in an unsigned 16 bit integer.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Iterable, List, Sequence, TextIO

from ..dungeon.voxels import Voxel

TEXT_COLOR = "ffffffff"

_COUNT = struct.Struct("<I")
_RECORD = struct.Struct("<HHH")
_U16_MAX = 0xFFFF


def format_text_map(voxels: Iterable[Voxel]) -> str:
    """Return the viewer text representation, one ``"X Z Y COLOR"`` line per voxel."""
    return "".join(f"{v.x} {v.z} {v.y} {TEXT_COLOR}\n" for v in voxels)


def write_text_map(voxels: Iterable[Voxel], fp: TextIO) -> int:
    count = 0
    for v in voxels:
        fp.write(f"{v.x} {v.z} {v.y} {TEXT_COLOR}\n")
        count += 1
    return count


def encode_binary_map(voxels: Sequence[Voxel]) -> bytes:
    """Encode voxels as a count-prefixed run of ``(x, y, z)`` u16 records.

    Raises:
        ValueError: a coordinate does not fit in an unsigned 16 bit field.
    """
    out = bytearray(_COUNT.pack(len(voxels)))
    for v in voxels:
        if not (0 <= v.x <= _U16_MAX and 0 <= v.y <= _U16_MAX and 0 <= v.z <= _U16_MAX):
            raise ValueError(f"voxel {tuple(v)} does not fit the binary map format")
        out += _RECORD.pack(v.x, v.y, v.z)
    return bytes(out)


def decode_binary_map(data: bytes) -> List[Voxel]:
    """Inverse of :func:`encode_binary_map`.

    Raises:
        ValueError: the payload is shorter than its declared record count.
    """
    if len(data) < _COUNT.size:
        raise ValueError("binary map is missing its record count")
    (count,) = _COUNT.unpack_from(data, 0)
    expected = _COUNT.size + count * _RECORD.size
    if len(data) < expected:
        raise ValueError(f"binary map truncated: expected {expected} bytes, got {len(data)}")
    return [Voxel(*rec) for rec in _RECORD.iter_unpack(data[_COUNT.size:expected])]


def write_binary_map(voxels: Sequence[Voxel], fp: BinaryIO) -> int:
    fp.write(encode_binary_map(voxels))
    return len(voxels)


def read_binary_map(fp: BinaryIO) -> List[Voxel]:
    return decode_binary_map(fp.read())


__all__ = [
    "format_text_map",
    "write_text_map",
    "encode_binary_map",
    "decode_binary_map",
    "write_binary_map",
    "read_binary_map",
]
