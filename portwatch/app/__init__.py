"""Application composition layer.

Wires the device query adapter, use cases, the cooperative monitor loop, and
either the Tk window or the headless console ports into a runnable program.
"""
