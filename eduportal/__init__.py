"""Learning portal timed test engine."""
