"""Review search HTTP API."""
