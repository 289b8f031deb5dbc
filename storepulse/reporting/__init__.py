"""Report assembly and formatting."""
