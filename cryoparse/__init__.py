"""Parse and validate command-line settings for blockchain data extraction."""

__version__ = "0.1.0"