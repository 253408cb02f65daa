"""
Place comments.

Responsibilities:
- Store comments left by users on a place.
- Reload a place's comment list after every change.
"""
