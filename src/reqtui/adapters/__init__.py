"""Front-end adapters that host the engine."""
