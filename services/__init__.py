"""Account and profile services."""
