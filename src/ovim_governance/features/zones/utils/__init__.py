"""Zone utilities."""
