"""Report assembly and output writers."""
