"""Pass-and-play game variants."""
