"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (pyserial device
    registry, notification sinks, settings storage, and test doubles) used by
    use cases.

Dependencies:
    ``serial_query_pyserial`` depends on ``pyserial``; the others use only
    the filesystem, logging, and domain protocol definitions.

Call context:
    Imported by app composition modules (for runtime wiring) and by tests (for
    mocks and adapter-level behavior verification).
"""
