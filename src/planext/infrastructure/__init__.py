"""Infrastructure layer — host project model and file I/O."""
