"""Village Development Fund client-side logic."""
