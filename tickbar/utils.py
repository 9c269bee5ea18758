"""Utility functions for parsing command line values."""

import re

__all__ = ["parse_count"]

SI_PREFIXES = {"k": 1000, "m": 1000**2, "g": 1000**3}


def parse_count(count: str | None) -> int | None:
    """Parse a tick count with optional SI prefix.

    Supports:
    - Plain numbers: 1000, 1_000_000
    - SI prefixes: k, m, g (powers of 1000), with fractions like 1.5k
    - Case insensitive

    Examples: 60000, 60k, 1.5m
    """
    if count is None:
        return None
    s = count.strip().lower().replace("_", "")

    m = re.match(r"^(\d+(?:\.\d+)?)\s*([kmg])$", s)
    if m:
        num, prefix = m.groups()
        return int(float(num) * SI_PREFIXES[prefix])

    m = re.match(r"^(\d+)$", s)
    if m:
        return int(m.group(1))

    raise ValueError(f"Invalid count format: {count}")
