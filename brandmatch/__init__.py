"""Brand partner discovery and rule-based match classification."""
