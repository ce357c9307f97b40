"""
app/schemas package marker.
"""

from app.schemas.detection import BaselineRequest, DetectionRequest

__all__ = [
    "BaselineRequest",
    "DetectionRequest",
]
