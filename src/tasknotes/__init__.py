"""tasknotes: task status for markdown notes, encoded in file names."""

__version__ = "0.1.0"
