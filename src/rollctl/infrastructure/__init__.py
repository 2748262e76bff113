"""Infrastructure layer — reading caller-supplied input files."""
