"""
Geometry Module

Point and line value types used to position profiles in an image.
"""

from pixelprofile.geometry.models import Point2D, Line2D, distance

__all__ = ["Point2D", "Line2D", "distance"]
