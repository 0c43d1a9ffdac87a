"""Desktop app and command line tools for the chaos game."""
