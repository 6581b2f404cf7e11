"""Line-oriented text editor over an in-memory document."""

__all__ = [
    "adapters",
    "cli",
    "commands",
    "document",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
