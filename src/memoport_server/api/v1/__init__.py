"""Version 1 of the memoport HTTP API."""
