import hashlib
import io
import os
import tempfile
from pathlib import Path

from bitpack import BitReader, BitWriter
from bitstream import (
    EMPTY_STREAM, KIND_SIZE, MAX_COUNT, CorruptStreamError,
    read_count, read_header, write_count, write_header,
)
from converters import converter_for, probe_converter_kind
from huffman import Leaf, build_tree, count_frequencies
from treecodec import decode_element, read_tree, write_tree

def pack(data: bytes, converter, *, digest: str = "md5"):
    """
    Returns:
      packed: tree | count | body (no converter discriminator)
      digest: digest of the original elements
      meta: dict with total, unique, tree_bits, body_bits, frequencies, codes
    """
    # pass 1
    freqs = count_frequencies(converter.elements(data))
    total = sum(freqs.values())
    if total > MAX_COUNT:
        raise ValueError(f"too many elements to pack: {total}")
    root = build_tree(freqs, converter.key)

    h = hashlib.new(digest)
    if root is None:
        meta = dict(total=0, unique=0, tree_bits=0, body_bits=0, frequencies=freqs, codes={})
        return EMPTY_STREAM, h.digest(), meta

    buf = io.BytesIO()
    with BitWriter(buf) as bw:
        codes = write_tree(root, bw, converter)
        bw.align()
        tree_bits = bw.bits_written
        write_count(bw, total)
        body_start = bw.bits_written

        # pass 2
        for e in converter.elements(data).tolist():
            code, length = codes[e]
            bw.write_code(code, length)
            h.update(converter.element_bytes(e))
        body_bits = bw.bits_written - body_start

    meta = dict(total=total, unique=len(freqs), tree_bits=tree_bits,
                body_bits=body_bits, frequencies=freqs, codes=codes)
    return buf.getvalue(), h.digest(), meta

def unpack(packed: bytes, converter, out=None, *, digest: str = "md5") -> bytes:
    """
    Decode a packed stream; writes the original content to 'out' if given.
    Returns the digest of the decoded elements.
    """
    h = hashlib.new(digest)
    if len(packed) == len(EMPTY_STREAM):
        if packed != EMPTY_STREAM:
            raise CorruptStreamError("Malformed stream: count without tree")
        if out is not None:
            converter.write_output(out, ())
        return h.digest()

    br = BitReader(io.BytesIO(packed))
    try:
        root = read_tree(br, converter)
        br.align()
        n = read_count(br)
    except CorruptStreamError:
        raise
    except (EOFError, ValueError) as exc:
        raise CorruptStreamError(f"Malformed stream: bad header ({exc})") from exc
    if n <= 0:
        raise CorruptStreamError(f"Malformed stream: bad element count {n}")

    elements = converter.check_sequence(_decode_elements(root, br, n, converter, h))
    try:
        if out is None:
            for _ in elements:
                pass
        else:
            converter.write_output(out, elements)
    except CorruptStreamError:
        raise
    except ValueError as exc:
        # UnicodeDecodeError included
        raise CorruptStreamError(f"Malformed stream: {exc}") from exc

    if not br.at_end():
        raise CorruptStreamError("Malformed stream: trailing data after body")
    return h.digest()

def _decode_elements(root, br, n, converter, h):
    if isinstance(root, Leaf):
        # single distinct element: zero-length codeword, no body bits
        chunk = converter.element_bytes(root.element)
        for _ in range(n):
            h.update(chunk)
            yield root.element
        return
    for i in range(n):
        try:
            e = decode_element(root, br)
        except EOFError as exc:
            raise CorruptStreamError(f"Malformed stream: body truncated after {i} of {n} elements") from exc
        h.update(converter.element_bytes(e))
        yield e

def pack_file(src, dst, kind=None, *, digest: str = "md5"):
    """
    Pack src into dst with a leading converter discriminator.
    The converter kind is probed from src when not given.
    """
    src, dst = Path(src), Path(dst)
    data = src.read_bytes()
    if kind is None:
        kind = probe_converter_kind(src, data)
    converter = converter_for(kind)
    packed, d, meta = pack(data, converter, digest=digest)
    with open(dst, "wb") as f:
        write_header(f, converter.kind)
        f.write(packed)
    meta["kind"] = converter.kind
    meta["original_size"] = len(data)
    meta["packed_size"] = KIND_SIZE + len(packed)
    return d, meta

def unpack_file(src, dst=None, *, digest: str = "md5"):
    """
    Returns (digest, converter kind). Decoded content goes to dst if given.
    """
    with open(src, "rb") as f:
        kind = read_header(f)
        packed = f.read()
    converter = converter_for(kind)
    if dst is None:
        return unpack(packed, converter, digest=digest), kind
    # decode next to dst and only replace it once the whole stream checks out
    dst = Path(dst)
    tmp = tempfile.NamedTemporaryFile(dir=dst.parent, prefix=dst.name + ".", delete=False)
    try:
        with tmp as out:
            d = unpack(packed, converter, out, digest=digest)
        os.replace(tmp.name, dst)
    except BaseException:
        Path(tmp.name).unlink(missing_ok=True)
        raise
    return d, kind
