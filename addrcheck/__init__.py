"""Check a plaintext address list against a local SQLite address database."""

__version__ = "0.1.0"
