"""LZ78-style compression (lz), a single-file archiver (archive) and its command line (cli)."""

__version__ = "0.1.0"
__all__ = ["archive", "cli", "lz"]