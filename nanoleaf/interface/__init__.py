"""
High-level interface.

This module contains the objects most users need:
- Nanoleaf (a device handle)
- NanoStream (an external control session)
- discover_nanoleafs (find devices and build handles for them)
"""

from .nanoleaf import Nanoleaf, NanoStream, discover_nanoleafs

__all__ = [
    "Nanoleaf",
    "NanoStream",
    "discover_nanoleafs",
]
