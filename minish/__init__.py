"""Core of a small POSIX-style shell: validation, expansion, parsing, here-documents and pipelines."""

__version__ = "0.1.0"