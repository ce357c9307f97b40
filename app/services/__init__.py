"""
app/services package marker.
"""

from app.services.detection_service import DetectionService, get_detection_service

__all__ = [
    "DetectionService",
    "get_detection_service",
]
