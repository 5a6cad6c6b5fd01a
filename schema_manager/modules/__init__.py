"""Schema engine modules: builders, output composition and content access."""
