"""Release packaging and emulator support tooling."""

__version__ = "0.3.0"
