"""Serial port presence watcher."""

__version__ = "0.1.0"
