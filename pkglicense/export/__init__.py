"""Snapshot export for collected licenses."""

from pkglicense.export.snapshot import render_snapshot, verify_snapshot, write_snapshot

__all__ = ["render_snapshot", "verify_snapshot", "write_snapshot"]
