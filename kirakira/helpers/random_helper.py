import math

_LCG_MODULUS = 2147483647
_LCG_MULTIPLIER = 16807


def string_hash(value: str) -> int:
    """
    Polynomial rolling hash (``hash * 31 + code_unit``) over the UTF-16 code units of ``value``,
    wrapped to a signed 32-bit integer. Returns the absolute value.

    Persisted element ids are re-hashed to render names, colors and scales, so this must never change.
    """

    hash_value = 0
    encoded = value.encode("utf-16-le")

    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        hash_value = (hash_value * 31 + code_unit) & 0xFFFFFFFF

    if hash_value >= 0x80000000:
        hash_value -= 0x100000000

    return abs(hash_value)


class SeededRandom:
    """
    Park-Miller linear congruential generator. The same seed yields the same sequence of draws
    in any runtime, which keeps generated gardens reproducible.
    """

    def __init__(self, seed: int):
        seed = int(seed)
        remainder = abs(seed) % _LCG_MODULUS
        self.state = -remainder if seed < 0 else remainder

        if self.state <= 0:
            self.state += _LCG_MODULUS - 1

    def next(self) -> float:
        """Advances the generator and returns a float in [0, 1)."""

        self.state = (self.state * _LCG_MULTIPLIER) % _LCG_MODULUS
        return (self.state - 1) / (_LCG_MODULUS - 1)

    def next_int(self, min_value: int, max_value: int) -> int:
        """Returns an integer in [min_value, max_value], both inclusive."""

        return math.floor(self.next() * (max_value - min_value + 1)) + min_value

    def next_float(self, min_value: float, max_value: float) -> float:
        return self.next() * (max_value - min_value) + min_value
