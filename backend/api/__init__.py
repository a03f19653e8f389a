"""
TalentFit API Routers
FastAPI router modules for matching and developer tooling.
"""
from backend.api import dev, matches

__all__ = [
    "dev",
    "matches",
]
