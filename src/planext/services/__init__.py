"""Service layer — operations the CLI (or any other host) drives."""
