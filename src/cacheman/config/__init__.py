"""cacheman configuration properties."""
