"""Showcase catalog service.

Operators submit website showcase entries with an optional demo video,
browse and delete them, and track blob storage consumption.
"""

__version__ = "1.0.0"
