"""Document loaders feeding the scoring engine."""
