"""Account management REST API."""
