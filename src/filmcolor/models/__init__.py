"""Image data models."""
