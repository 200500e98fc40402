"""VDC utilities."""
