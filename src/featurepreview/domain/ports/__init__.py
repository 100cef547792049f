"""Domain port definitions for adapters."""

from __future__ import annotations

from .changes import PullRequestChanges, PullRequestCommenter
from .resources import FeatureResourceGateway

__all__ = [
    "FeatureResourceGateway",
    "PullRequestChanges",
    "PullRequestCommenter",
]
