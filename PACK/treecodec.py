from typing import Any, Dict, Tuple

from bitstream import CorruptStreamError
from huffman import Internal, Leaf, Node

CodeWord = Tuple[int, int]  # (code, length), MSB-first

# A 31-bit element count cannot produce a deeper Huffman tree
# (the smallest input reaching depth d has Fibonacci(d + 2) elements).
MAX_TREE_DEPTH = 64

INTERNAL_BIT = 1
LEAF_BIT = 0


def write_tree(root: Node, bw, converter) -> Dict[Any, CodeWord]:
    """
    Serialize the tree in pre-order and return element -> codeword.

    Each node starts with one flag bit (1 internal, 0 leaf); a leaf is
    followed by its element in converter.width bits. Left is bit 0, right 1.
    A lone leaf gets the empty codeword (0, 0).
    """
    codes: Dict[Any, CodeWord] = {}
    _write_node(root, bw, converter, 0, 0, codes)
    return codes

def _write_node(node, bw, converter, code, length, codes):
    if isinstance(node, Internal):
        bw.write_bit(INTERNAL_BIT)
        _write_node(node.left, bw, converter, code << 1, length + 1, codes)
        _write_node(node.right, bw, converter, (code << 1) | 1, length + 1, codes)
    else:
        bw.write_bit(LEAF_BIT)
        converter.write_element(bw, node.element)
        codes[node.element] = (code, length)

def read_tree(br, converter) -> Node:
    seen = set()
    return _read_node(br, converter, 0, seen)

def _read_node(br, converter, depth, seen):
    if depth > MAX_TREE_DEPTH:
        raise CorruptStreamError(f"Malformed stream: tree deeper than {MAX_TREE_DEPTH}")
    if br.read_bit() == INTERNAL_BIT:
        left = _read_node(br, converter, depth + 1, seen)
        right = _read_node(br, converter, depth + 1, seen)
        return Internal(left, right)
    element = converter.read_element(br)
    if element in seen:
        raise CorruptStreamError(f"Malformed stream: element {element!r} appears twice in tree")
    seen.add(element)
    return Leaf(element, 0)

def decode_element(root: Node, br):
    node = root
    while isinstance(node, Internal):
        node = node.right if br.read_bit() else node.left
    return node.element
