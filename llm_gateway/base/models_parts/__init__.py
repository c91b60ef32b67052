"""Neutral data model implementations (one concern per module)."""
