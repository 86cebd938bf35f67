#!/usr/bin/env python3
"""
hufpack.py : pack a file with Huffman coding and verify the round trip

    python hufpack.py notes.txt          # writes notes.txt.packed, prints both digests
    python hufpack.py notes.txt.packed   # writes notes.txt

Exit code is 0 on success, 1 on any I/O or codec failure or digest mismatch.
"""
import argparse
import sys
from pathlib import Path

from bitstream import PACKED_SUFFIX, packed_path, unpacked_path
from codec import pack_file, unpack_file

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Huffman pack/unpack with digest verification.")
    ap.add_argument("filename", help="file to pack, or a .packed file to unpack")
    ap.add_argument("--digest", default="md5", help="hashlib digest name (default md5)")
    args = ap.parse_args(argv)

    path = Path(args.filename)
    try:
        if path.suffix == PACKED_SUFFIX:
            dst = unpacked_path(path)
            digest, _ = unpack_file(path, dst, digest=args.digest)
            print(f"[hufpack] unpacked {path} -> {dst}")
            print(f"Unpacked digest: {digest.hex().upper()}")
            return 0

        dst = packed_path(path)
        original, meta = pack_file(path, dst, digest=args.digest)
        print(f"[hufpack] packed {path} -> {dst} ({meta['original_size']} -> {meta['packed_size']} bytes)")
        print(f"Original digest: {original.hex().upper()}")

        unpacked, _ = unpack_file(dst, digest=args.digest)
        print(f"Unpacked digest: {unpacked.hex().upper()}")
    except (OSError, ValueError) as exc:
        print(f"[hufpack] {path}: {exc}", file=sys.stderr)
        return 1

    if unpacked != original:
        print("[hufpack] digest mismatch", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
