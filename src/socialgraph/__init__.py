"""SocialGraph: a small people-and-friendships graph with recommendations."""

from __future__ import annotations

__version__ = "0.1.0"
