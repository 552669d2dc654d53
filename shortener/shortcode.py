"""Short path generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random short paths for URLs."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    # Characters accepted in user supplied paths
    PATH_CHARS = BASE62_CHARS + "-_"

    def __init__(self, default_length: int = 6, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Random source; anything with ``choices`` works. Defaults to SystemRandom.
        """
        if default_length < 1:
            raise ValueError("default_length must be at least 1")
        self.default_length = default_length
        self.rng = rng or random.SystemRandom()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code drawn uniformly from the base62 alphabet
        """
        length = self.default_length if length is None else length
        if length < 1:
            raise ValueError("length must be at least 1")
        return ''.join(self.rng.choices(self.BASE62_CHARS, k=length))

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code only uses path characters (alphanumeric, '-' and '_').

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return all(c in ShortCodeGenerator.PATH_CHARS for c in code)
