"""KeySafe — find hard-coded private keys in source code."""

__version__ = "0.1.0"
