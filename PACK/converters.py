import mimetypes
from pathlib import Path
from typing import Iterable, Protocol

import numpy as np

from bitstream import ConverterKind

_CHUNK = 1 << 16


class ElementConverter(Protocol):
    """
    What the pack/unpack pipeline needs to know about one element type.
    """
    kind: ConverterKind
    width: int  # fixed width in bits of a serialized element

    def key(self, element): ...
    def elements(self, data: bytes) -> np.ndarray: ...
    def write_element(self, bw, element) -> None: ...
    def read_element(self, br): ...
    def element_bytes(self, element) -> bytes: ...
    def check_sequence(self, elements: Iterable) -> Iterable: ...
    def write_output(self, out, elements: Iterable) -> None: ...


class ByteConverter:
    kind = ConverterKind.BYTE
    width = 8

    def key(self, element):
        return element

    def elements(self, data: bytes) -> np.ndarray:
        return np.frombuffer(data, dtype=np.uint8)

    def write_element(self, bw, element):
        bw.write_code(element, self.width)

    def read_element(self, br):
        return br.read_code(self.width)

    def element_bytes(self, element) -> bytes:
        return bytes((element,))

    def check_sequence(self, elements):
        return elements

    def write_output(self, out, elements):
        buf = bytearray()
        for e in elements:
            buf.append(e)
            if len(buf) >= _CHUNK:
                out.write(buf)
                buf.clear()
        if buf:
            out.write(buf)


class CharacterConverter:
    """
    UTF-8 text as UTF-16 code units; a surrogate pair is two elements.
    """
    kind = ConverterKind.CHARACTER
    width = 16

    def key(self, element):
        return element

    def elements(self, data: bytes) -> np.ndarray:
        units = data.decode("utf-8").encode("utf-16-be")
        return np.frombuffer(units, dtype=">u2")

    def write_element(self, bw, element):
        bw.write_code(element, self.width)

    def read_element(self, br):
        return br.read_code(self.width)

    def element_bytes(self, element) -> bytes:
        return element.to_bytes(2, "big")

    def check_sequence(self, elements):
        """
        Pass elements through, raising ValueError at a lone or misordered surrogate.
        """
        high = None
        for i, e in enumerate(elements):
            if 0xD800 <= e <= 0xDBFF:
                if high is not None:
                    raise ValueError(f"unpaired high surrogate 0x{high:04x} at unit {i - 1}")
                high = e
            elif 0xDC00 <= e <= 0xDFFF:
                if high is None:
                    raise ValueError(f"unpaired low surrogate 0x{e:04x} at unit {i}")
                high = None
            elif high is not None:
                raise ValueError(f"unpaired high surrogate 0x{high:04x} at unit {i - 1}")
            yield e
        if high is not None:
            raise ValueError(f"unpaired high surrogate 0x{high:04x} at end of text")

    def write_output(self, out, elements):
        # surrogate pairs only decode as a whole, so collect everything first
        units = np.fromiter(elements, dtype=np.uint16).astype(">u2")
        text = units.tobytes().decode("utf-16-be")
        out.write(text.encode("utf-8"))


CONVERTERS = {
    ConverterKind.CHARACTER: CharacterConverter,
    ConverterKind.BYTE: ByteConverter,
}

def converter_for(kind: ConverterKind) -> ElementConverter:
    return CONVERTERS[ConverterKind(kind)]()

def probe_converter_kind(path, data: bytes) -> ConverterKind:
    """
    Text files (by mime type) that decode as UTF-8 use characters,
    everything else uses bytes.
    """
    mime, _ = mimetypes.guess_type(Path(path).name)
    if not (mime or "").startswith("text"):
        return ConverterKind.BYTE
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return ConverterKind.BYTE
    return ConverterKind.CHARACTER
