from __future__ import annotations
import heapq
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union

import numpy as np


@dataclass(frozen=True)
class Leaf:
    element: Any
    freq: int = 0


@dataclass(frozen=True)
class Internal:
    left: "Node"
    right: "Node"
    freq: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "freq", self.left.freq + self.right.freq)


Node = Union[Leaf, Internal]


def count_frequencies(elements: Iterable) -> Mapping[Any, int]:
    """
    element -> number of occurrences, for every element seen at least once.
    """
    if isinstance(elements, np.ndarray):
        values, counts = np.unique(elements, return_counts=True)
        freqs = dict(zip(values.tolist(), counts.tolist()))
    else:
        freqs = dict(Counter(elements))
    return MappingProxyType(freqs)

def leftmost(node: Node):
    while isinstance(node, Internal):
        node = node.left
    return node.element

def build_tree(freqs: Mapping[Any, int], key: Optional[Callable] = None) -> Optional[Node]:
    """
    Merge the two lowest nodes until one is left.

    Ties on frequency are broken by the key of each node's leftmost element.
    Every element lives in exactly one leaf, so two nodes never tie on both
    and the heap never has to compare nodes themselves.
    """
    if key is None:
        key = lambda e: e
    pq = [(f, key(e), Leaf(e, f)) for e, f in freqs.items()]
    heapq.heapify(pq)
    if not pq:
        return None
    while len(pq) > 1:
        _, _, a = heapq.heappop(pq)
        _, _, b = heapq.heappop(pq)
        node = Internal(a, b)
        heapq.heappush(pq, (node.freq, key(leftmost(node)), node))
    return pq[0][2]

def iter_leaves(node: Optional[Node]) -> Iterator[Leaf]:
    """Leaves in left-to-right order."""
    stack = [node] if node is not None else []
    while stack:
        n = stack.pop()
        if isinstance(n, Internal):
            stack.append(n.right)
            stack.append(n.left)
        else:
            yield n

def tree_depth(node: Optional[Node]) -> int:
    if node is None or isinstance(node, Leaf):
        return 0
    return 1 + max(tree_depth(node.left), tree_depth(node.right))
