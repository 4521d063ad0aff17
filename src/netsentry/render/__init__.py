"""Render boundary: marker visuals and render-plan reconciliation."""
