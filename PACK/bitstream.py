import struct
from enum import IntEnum

PACKED_SUFFIX = ".packed"

# Packed file:
# converter kind(u8) | tree (bit packed, zero padded) | count(i32, big-endian) | body
KIND_FMT = ">B"
KIND_SIZE = struct.calcsize(KIND_FMT)

COUNT_FMT = ">i"
COUNT_SIZE = struct.calcsize(COUNT_FMT)
MAX_COUNT = 2**31 - 1

# An empty input packs to the count field alone.
EMPTY_STREAM = struct.pack(COUNT_FMT, 0)


class CorruptStreamError(ValueError):
    pass


class ConverterKind(IntEnum):
    CHARACTER = 0x01
    BYTE = 0x02


def write_header(f, kind: ConverterKind):
    f.write(struct.pack(KIND_FMT, int(kind)))

def read_header(f) -> ConverterKind:
    data = f.read(KIND_SIZE)
    if len(data) != KIND_SIZE:
        raise CorruptStreamError("Malformed stream: header too short")
    (value,) = struct.unpack(KIND_FMT, data)
    try:
        return ConverterKind(value)
    except ValueError:
        raise ValueError(f"Unsupported converter kind: 0x{value:02x}") from None

def write_count(bw, n: int):
    if not (0 <= n <= MAX_COUNT):
        raise ValueError(f"element count out of range: {n}")
    bw.write_bytes(struct.pack(COUNT_FMT, n))

def read_count(br) -> int:
    (n,) = struct.unpack(COUNT_FMT, br.read_bytes(COUNT_SIZE))
    return n

def packed_path(path):
    return path.with_name(path.name + PACKED_SUFFIX)

def unpacked_path(path):
    if path.suffix != PACKED_SUFFIX:
        raise ValueError(f"not a {PACKED_SUFFIX} file: {path}")
    return path.with_suffix("")
