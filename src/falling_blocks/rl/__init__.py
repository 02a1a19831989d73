"""Scripts that drive the gymnasium environment."""
