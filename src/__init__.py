"""Content tooling for the Schörke artist management website."""

__version__ = "0.1.0"
