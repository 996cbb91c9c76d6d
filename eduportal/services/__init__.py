"""Service layer: the timed test engine and its collaborators."""
