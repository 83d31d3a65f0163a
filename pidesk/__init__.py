"""PiDesk: countdown timer and to-do list for an e-ink Raspberry Pi."""

__version__ = "1.0.0"
