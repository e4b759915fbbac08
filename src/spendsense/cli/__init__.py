"""Command-line interface for spendsense."""
