"""Core business logic layer.

Subpackages:
- painting: pointer strokes -> block-aligned grid writes
- aggregation: coarse-row stripes for the zoomed views
- reporting: allocation summary
- reorder: drag-to-reorder of the activity list
"""
__all__ = ["painting", "aggregation", "reporting", "reorder"]
