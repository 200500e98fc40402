"""Feature modules for resource governance."""
