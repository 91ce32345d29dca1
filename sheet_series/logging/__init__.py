"""Application logging setup and the skipped-row log."""
