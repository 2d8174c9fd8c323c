"""HTTP service for generating two-sided fact puzzles."""
