"""State/store layer.

This package is the single source of truth for the tracked fleet.  Every
writer (simulator ticks, registration, manual edits) goes through
:class:`~netsentry.state.store.DeviceStore`.
"""
