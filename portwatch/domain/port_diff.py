"""Pure comparison of two port snapshots."""

from __future__ import annotations

from typing import Union

from .entities import PortDiff, PortSnapshot, _Uninitialized

SnapshotOrUnset = Union[PortSnapshot, _Uninitialized]


def diff_snapshots(old: SnapshotOrUnset, new: PortSnapshot) -> PortDiff:
    """Return the records added and removed between ``old`` and ``new``.

    Args:
        old: Previously observed snapshot.
        new: Freshly enumerated snapshot.

    Returns:
        PortDiff: ``added`` holds records of ``new`` absent from ``old`` and
        ``removed`` holds records of ``old`` absent from ``new``, both sorted.

    Raises:
        ValueError: If ``old`` is the uninitialized marker. Callers adopt the
            first snapshot as a baseline instead of diffing it, otherwise every
            already-attached port would be reported as newly connected.
    """
    if isinstance(old, _Uninitialized):
        raise ValueError("Cannot diff against an uninitialized snapshot; adopt a baseline first.")
    added = tuple(sorted(new.ports - old.ports))
    removed = tuple(sorted(old.ports - new.ports))
    return PortDiff(added=added, removed=removed)


__all__ = ["SnapshotOrUnset", "diff_snapshots"]
