"""Directory monitor that keeps a CRC32 listing of files up to date for mirroring."""

__version__ = "0.10.0"

__all__ = ["__version__"]