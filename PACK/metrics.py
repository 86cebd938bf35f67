import numpy as np

def compression_ratio(original_size: int, packed_size: int) -> float:
    if packed_size == 0:
        return float("inf")
    return float(original_size / packed_size)

def average_code_length(frequencies, codes) -> float:
    """
    Mean codeword length in bits, weighted by element frequency.
    """
    if not frequencies:
        return float("nan")
    f = np.array([frequencies[e] for e in codes], dtype=np.float64)
    L = np.array([codes[e][1] for e in codes], dtype=np.float64)
    return float(np.dot(f, L) / f.sum())

def entropy_bits(frequencies) -> float:
    """Shannon entropy of the element distribution, bits per element."""
    if not frequencies:
        return 0.0
    f = np.array(list(frequencies.values()), dtype=np.float64)
    p = f / f.sum()
    return float((p * np.log2(1.0 / p)).sum())
