"""Unix timestamp <-> text converter web utility."""
