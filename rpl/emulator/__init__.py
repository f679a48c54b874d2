"""Emulated window support."""

from rpl.emulator.bridge import (
    VIEWPORT_ELEMENT_ID,
    EmulatedPlatform,
    EmulatorBridge,
    HostDocument,
    SandboxBuilder,
    ValueCell,
    marshal,
)
from rpl.emulator.objects import PropertyDescriptor, ScriptObject

__all__ = [
    "VIEWPORT_ELEMENT_ID",
    "EmulatedPlatform",
    "EmulatorBridge",
    "HostDocument",
    "PropertyDescriptor",
    "SandboxBuilder",
    "ScriptObject",
    "ValueCell",
    "marshal",
]
