"""ShapeScan — raster shape detection."""

__version__ = "0.1.0"
