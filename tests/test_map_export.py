import io
import struct

import pytest

from mapgen.dungeon import Voxel
from mapgen.utils.map_export import (
    decode_binary_map,
    encode_binary_map,
    format_text_map,
    read_binary_map,
    write_binary_map,
    write_text_map,
)


def test_text_format_swaps_y_and_z():
    text = format_text_map([Voxel(1, 2, 3), Voxel(0, 10, 0)])
    assert text == "1 3 2 ffffffff\n0 0 10 ffffffff\n"


def test_write_text_map_counts_lines():
    buf = io.StringIO()
    assert write_text_map([Voxel(4, 5, 6)] * 3, buf) == 3
    assert buf.getvalue().count("\n") == 3


def test_binary_layout_is_little_endian():
    data = encode_binary_map([Voxel(1, 2, 3), Voxel(258, 0, 65535)])
    assert data[:4] == b"\x02\x00\x00\x00"
    assert len(data) == 4 + 2 * 6
    assert struct.unpack("<HHH", data[4:10]) == (1, 2, 3)
    assert data[10:12] == b"\x02\x01"


def test_binary_decode_matches_loader_expectations():
    voxels = [Voxel(0, 0, 0), Voxel(12, 10, 35)]
    buf = io.BytesIO()
    write_binary_map(voxels, buf)
    buf.seek(0)
    assert read_binary_map(buf) == voxels
    assert decode_binary_map(encode_binary_map([])) == []


def test_binary_rejects_out_of_range():
    with pytest.raises(ValueError):
        encode_binary_map([Voxel(70000, 0, 0)])
    with pytest.raises(ValueError):
        encode_binary_map([Voxel(0, -1, 0)])


def test_binary_rejects_truncated_payload():
    data = encode_binary_map([Voxel(1, 1, 1), Voxel(2, 2, 2)])
    with pytest.raises(ValueError):
        decode_binary_map(data[:-1])
    with pytest.raises(ValueError):
        decode_binary_map(b"\x01")
