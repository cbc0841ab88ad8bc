"""Pydantic schemas for the shortener wire format."""

from shortener.schemas.link import LinkStats, LinkSubmission, ShortLink

__all__ = [
    "LinkStats",
    "LinkSubmission",
    "ShortLink",
]
