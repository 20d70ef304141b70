"""Core models, errors and logging for the Galera probe."""
