import math

from metrics import average_code_length, compression_ratio, entropy_bits


def test_compression_ratio():
    assert compression_ratio(10, 5) == 2.0
    assert compression_ratio(10, 0) == float("inf")


def test_average_code_length():
    freqs = {97: 3, 98: 1}
    codes = {98: (0, 1), 97: (1, 1)}
    assert average_code_length(freqs, codes) == 1.0
    assert math.isnan(average_code_length({}, {}))


def test_entropy_bits():
    assert entropy_bits({1: 5, 2: 5}) == 1.0
    assert entropy_bits({1: 7}) == 0.0
    assert entropy_bits({}) == 0.0
