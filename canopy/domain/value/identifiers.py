"""Strongly typed identifiers for Canopy domain entities.

Comment identifiers are opaque strings so they can be used directly as
JSON object keys in the persisted snapshot.
"""

from typing import NewType

CommentId = NewType("CommentId", str)
