import io
import random

import numpy as np
import pytest

from bitpack import BitReader, BitWriter
from bitstream import CorruptStreamError
from converters import ByteConverter, CharacterConverter
from huffman import Internal, Leaf, build_tree, count_frequencies
from treecodec import MAX_TREE_DEPTH, decode_element, read_tree, write_tree


def _write(root, converter):
    buf = io.BytesIO()
    with BitWriter(buf) as bw:
        codes = write_tree(root, bw, converter)
    return buf.getvalue(), codes


def _bits(code, length):
    return format(code, f"0{length}b") if length else ""


def test_aaab_tree_serialization():
    root = build_tree({97: 3, 98: 1})
    data, codes = _write(root, ByteConverter())
    # 1 | 0 0x62 | 0 0x61, zero padded
    assert data == b"\x98\x8c\x20"
    assert codes == {98: (0, 1), 97: (1, 1)}


def test_single_leaf_has_empty_codeword():
    data, codes = _write(Leaf(ord("z"), 4), ByteConverter())
    assert data == b"\x3d\x00"
    assert codes == {ord("z"): (0, 0)}


def test_read_tree_mirrors_write_tree():
    rng = random.Random(11)
    freqs = count_frequencies(np.array([rng.randrange(256) for _ in range(5000)], dtype=np.uint8))
    root = build_tree(freqs)
    data, _ = _write(root, ByteConverter())

    back = read_tree(BitReader(io.BytesIO(data)), ByteConverter())

    def shape(n):
        if isinstance(n, Internal):
            return (shape(n.left), shape(n.right))
        return n.element
    assert shape(back) == shape(root)
    assert back.freq == 0


def test_character_leaves_are_16_bits():
    root = build_tree({0x263A: 2, 0x41: 1})
    data, codes = _write(root, CharacterConverter())
    # 1 + 2 * (1 + 16) bits
    assert len(data) == 5
    back = read_tree(BitReader(io.BytesIO(data)), CharacterConverter())
    assert back == Internal(Leaf(0x41, 0), Leaf(0x263A, 0))


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_codes_are_prefix_free_and_frequency_ordered(seed):
    rng = random.Random(seed)
    weights = [rng.random() ** 3 for _ in range(120)]
    data = np.array(rng.choices(range(120), weights=weights, k=20000), dtype=np.uint8)
    freqs = count_frequencies(data)
    _, codes = _write(build_tree(freqs), ByteConverter())

    words = {e: _bits(*cw) for e, cw in codes.items()}
    assert len(set(words.values())) == len(words)
    for a in words:
        for b in words:
            if a != b:
                assert not words[b].startswith(words[a])
    for a in freqs:
        for b in freqs:
            if freqs[a] < freqs[b]:
                assert len(words[a]) >= len(words[b])


def test_decode_element_walks_left_on_zero():
    root = build_tree({97: 3, 98: 1})
    br = BitReader(io.BytesIO(bytes([0b11100000])))
    assert [decode_element(root, br) for _ in range(4)] == [97, 97, 97, 98]


def test_runaway_tree_is_corrupt():
    data = b"\xff" * (MAX_TREE_DEPTH // 8 + 2)
    with pytest.raises(CorruptStreamError):
        read_tree(BitReader(io.BytesIO(data)), ByteConverter())


def test_duplicate_leaf_is_corrupt():
    buf = io.BytesIO()
    with BitWriter(buf) as bw:
        bw.write_bit(1)
        for _ in range(2):
            bw.write_bit(0)
            bw.write_code(0x41, 8)
    with pytest.raises(CorruptStreamError):
        read_tree(BitReader(io.BytesIO(buf.getvalue())), ByteConverter())


def test_truncated_tree_raises_eof():
    with pytest.raises(EOFError):
        read_tree(BitReader(io.BytesIO(b"\x98")), ByteConverter())
