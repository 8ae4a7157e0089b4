# ---------------------------------------------------------------------
# Gufo Probe: ICMPv4 echo probe
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

"""
Gufo Probe is the minimal Python asyncio ICMPv4 echo probe.

Attributes:
    __version__: Current version.
"""

# Gufo Probe modules
from .checksum import checksum
from .probe import Probe
from .session import ProbeSession

__version__: str = "0.1.0"
__all__ = ["Probe", "ProbeSession", "__version__", "checksum"]
