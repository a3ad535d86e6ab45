"""Settings, config discovery, and logging setup for headr."""
