"""
Geospatial helpers.

Responsibilities:
- Great-circle (haversine) distance between two coordinates.
- Stable nearest-first ordering of places around a reference coordinate.
"""
