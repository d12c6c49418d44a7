"""Data models shared by the builder and the render backends."""
