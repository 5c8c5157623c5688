"""
Interface definitions for adaptors.
"""

from metafield_proxy.adapters.interfaces.translator import (
    SEGMENT_SEPARATOR,
    MachineTranslator,
    join_composite,
    split_composite,
)

__all__ = [
    "SEGMENT_SEPARATOR",
    "MachineTranslator",
    "join_composite",
    "split_composite",
]
