"""Building blocks of a customizable assembler: integers, bit vectors, tokens and expressions."""

__version__ = "0.1.0"