"""Bathymetry coordinate resolution pipeline.

Resolves geographic coordinates (typed in or imported from survey CSV
reports) to seabed depth readings from the SGB geoportal bathymetry
MapServer, in rate-limited batches with per-coordinate layer fallback.
"""

__version__ = "0.1.0"
