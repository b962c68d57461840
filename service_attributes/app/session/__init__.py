"""Session activity handling."""
