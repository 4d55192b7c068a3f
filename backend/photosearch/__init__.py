"""Photo label indexing and keyword search."""

__version__ = "0.1.0"
