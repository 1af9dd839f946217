"""Small environment and logging helpers shared across the package."""
