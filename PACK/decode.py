import argparse
from pathlib import Path

from bitstream import unpacked_path
from codec import unpack_file

def main(argv=None):
    ap = argparse.ArgumentParser(description="Unpack a Huffman packed file.")
    ap.add_argument("--input", required=True, help="path to .packed file")
    ap.add_argument("--output", help="unpacked file (default: input without .packed)")
    ap.add_argument("--digest", default="md5", help="hashlib digest name (default md5)")
    args = ap.parse_args(argv)

    src = Path(args.input)
    dst = Path(args.output) if args.output else unpacked_path(src)
    digest, kind = unpack_file(src, dst, digest=args.digest)

    print(f"[decode] wrote {dst} converter={kind.name.lower()} size={dst.stat().st_size}")
    print(f"[decode] {args.digest}={digest.hex()}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
