"""woerter: spaced-repetition scheduling for vocabulary review."""

from woerter.consts import VERSION

__version__ = VERSION
