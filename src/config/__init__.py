"""Configuration access for docgrade."""
