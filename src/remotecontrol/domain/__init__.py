"""Domain back-ends consumed by the command catalog."""

from remotecontrol.domain.amf import StubAmf
from remotecontrol.domain.emulator import StubEmulator, StubGnb, StubUe
from remotecontrol.domain.protocols import AmfApi, EmulatorApi, GnbApi, UeApi

__all__ = [
    "EmulatorApi",
    "UeApi",
    "GnbApi",
    "AmfApi",
    "StubEmulator",
    "StubUe",
    "StubGnb",
    "StubAmf",
]
