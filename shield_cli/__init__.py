"""
Module 07 - Shield CLI

Command-line interface for the encoding and commitment library.

Usage:
    python -m shield_cli convert ff --from hex --to dec
    python -m shield_cli pack 0x1234 --count 2
    python -m shield_cli hash 0x1234 0xabcd 0xffff
    python -m shield_cli verify --fields 0x1234 0xabcd 0xffff --commitment 0x... --count 0
"""

__version__ = "0.1.0"
