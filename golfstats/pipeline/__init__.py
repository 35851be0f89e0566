"""End-to-end scoring report."""
