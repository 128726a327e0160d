"""Command-line tools and preset library."""
