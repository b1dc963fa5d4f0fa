"""
Python implementation of the Mulberry32 PRNG.

Every random decision in the garden (grid shuffle, sub-cell jitter, message
spawn jitter) flows through an instance of this generator so that a garden
can be regenerated identically on any platform. Python's random and NumPy's
random must not be used for layout code.
"""

_GOLDEN_GAMMA = 0x6D2B79F5


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


def _imul(a, b):
    """32-bit integer multiply keeping the low word."""
    return (_uint32(a) * _uint32(b)) & 0xFFFFFFFF


class Mulberry32PRNG:
    """
    Mulberry32 PRNG with a single 32-bit state word.

    Independent instances never share state, so one stream per concern
    (grid, message, emoji) can be created from separate seeds.
    """

    def __init__(self, seed):
        """Initialize with an integer seed (reduced to 32 bits)."""
        self.seed = _uint32(seed)
        self._state = self.seed
        self.call_count = 0

    def random(self):
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        # State is advanced before mixing, so seed 0 is not a fixed point
        self._state = _uint32(self._state + _GOLDEN_GAMMA)
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t = _uint32(t + _imul(t ^ (t >> 7), t | 61)) ^ t
        return _uint32(t ^ (t >> 14)) / 4294967296

    def choice(self, seq):
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]

    def shuffled_indices(self, n):
        """
        Return a Fisher-Yates permutation of range(n).

        Walks from the last index down to 1, drawing once per step.
        """
        indices = list(range(n))
        for i in range(n - 1, 0, -1):
            j = int(self.random() * (i + 1))
            indices[i], indices[j] = indices[j], indices[i]
        return indices
