"""
Backend services for the profile API.
"""

from . import profile_service

__all__ = [
    "profile_service",
]
