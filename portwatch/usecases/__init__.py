"""Use-case layer for the port-presence tracking engine.

Each module coordinates domain objects and ports without performing OS
device queries or UI calls directly.
"""
