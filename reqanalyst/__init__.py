"""AI Requirements Analyst backend."""
