"""Route precipitation risk annotation service."""
