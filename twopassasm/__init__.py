"""A two-pass assembler with a macro pre-assembler for a 24-bit teaching machine."""

__version__ = "0.1.0"
__all__ = ["__version__"]