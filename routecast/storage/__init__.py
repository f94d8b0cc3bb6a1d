"""In-memory state shared with the renderer."""
