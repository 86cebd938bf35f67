import argparse
from pathlib import Path

from bitstream import ConverterKind, packed_path
from codec import pack_file
from metrics import average_code_length, compression_ratio, entropy_bits

KINDS = {"auto": None, "byte": ConverterKind.BYTE, "character": ConverterKind.CHARACTER}

def describe(kind, element) -> str:
    if kind == ConverterKind.CHARACTER:
        return f"Character {chr(element)!r}"
    return f"Byte 0x{element:02x}"

def main(argv=None):
    ap = argparse.ArgumentParser(description="Pack a file with Huffman coding.")
    ap.add_argument("--input", required=True, help="file to pack")
    ap.add_argument("--output", help="packed file (default: <input>.packed)")
    ap.add_argument("--kind", choices=sorted(KINDS), default="auto", help="element type (default: probe)")
    ap.add_argument("--digest", default="md5", help="hashlib digest name (default md5)")
    ap.add_argument("--verbose", action="store_true", help="print frequency and code of every element")
    args = ap.parse_args(argv)

    src = Path(args.input)
    dst = Path(args.output) if args.output else packed_path(src)
    digest, meta = pack_file(src, dst, KINDS[args.kind], digest=args.digest)

    kind = meta["kind"]
    if args.verbose:
        codes = meta["codes"]
        for e in sorted(codes):
            code, L = codes[e]
            bits = format(code, f"0{L}b") if L else "-"
            print(f"[encode] {describe(kind, e)} freq={meta['frequencies'][e]} code={bits}")

    print(f"[encode] wrote {dst}")
    print(f"[encode] converter={kind.name.lower()} total={meta['total']} unique={meta['unique']}")
    print(f"[encode] tree={meta['tree_bits']} bits, body={meta['body_bits']} bits")
    print(f"[encode] ratio={compression_ratio(meta['original_size'], meta['packed_size']):.3f} "
          f"avg_code={average_code_length(meta['frequencies'], meta['codes']):.3f} "
          f"entropy={entropy_bits(meta['frequencies']):.3f} bits/element")
    print(f"[encode] {args.digest}={digest.hex()}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
