"""Command-line interface for edd-email-tags."""
