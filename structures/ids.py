"""
ids.py — Node Identity Tokens
==============================
Process-wide monotonic id source.  Ids only need to be unique and to
survive reordering / mutation; the encoding itself carries no meaning.
"""

import itertools

_counter = itertools.count(1)


def next_id(prefix: str = "n") -> str:
    return f"{prefix}{next(_counter)}"
