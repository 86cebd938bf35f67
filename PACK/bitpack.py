class BitWriter:
    """
    MSB-first bit writer over a binary file object.
    Partial bytes are zero-padded when aligned or flushed.
    """
    def __init__(self, f):
        self.f = f
        self._cur = 0
        self._nbits = 0  # bits currently in _cur (0..7)
        self.bits_written = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.flush()

    def write_bit(self, bit: int):
        self._cur = (self._cur << 1) | (1 if bit else 0)
        self._nbits += 1
        self.bits_written += 1
        if self._nbits == 8:
            self.f.write(bytes((self._cur,)))
            self._cur = 0
            self._nbits = 0

    def write_code(self, code: int, length: int):
        """Write 'length' bits of code (MSB-first)."""
        for i in range(length - 1, -1, -1):
            self.write_bit((code >> i) & 1)

    def write_bytes(self, data: bytes):
        if self._nbits:
            raise ValueError("write_bytes called in the middle of a byte")
        self.f.write(data)
        self.bits_written += 8 * len(data)

    def align(self):
        """Pad remaining bits with zeros."""
        if self._nbits > 0:
            self.bits_written += 8 - self._nbits
            self.f.write(bytes((self._cur << (8 - self._nbits),)))
            self._cur = 0
            self._nbits = 0

    def flush(self):
        self.align()
        self.f.flush()


class BitReader:
    """
    MSB-first bit reader; pulls one byte from the file object at a time.
    """
    def __init__(self, f):
        self.f = f
        self._cur = 0
        self._nbits = 0  # unread bits left in _cur

    def _next_byte(self) -> int:
        b = self.f.read(1)
        if not b:
            raise EOFError("Unexpected end of bitstream")
        return b[0]

    def read_bit(self) -> int:
        if self._nbits == 0:
            self._cur = self._next_byte()
            self._nbits = 8
        self._nbits -= 1
        return (self._cur >> self._nbits) & 1

    def read_code(self, length: int) -> int:
        code = 0
        for _ in range(length):
            code = (code << 1) | self.read_bit()
        return code

    def read_bytes(self, n: int) -> bytes:
        if self._nbits:
            raise ValueError("read_bytes called in the middle of a byte")
        data = self.f.read(n)
        if len(data) != n:
            raise EOFError("Unexpected end of bitstream")
        return data

    def align(self):
        """Skip the padding at the end of the current byte."""
        pad = self._cur & ((1 << self._nbits) - 1)
        self._nbits = 0
        if pad:
            raise ValueError("Malformed stream: non-zero padding bits")

    def at_end(self) -> bool:
        if self._cur & ((1 << self._nbits) - 1):
            return False
        return not self.f.read(1)
