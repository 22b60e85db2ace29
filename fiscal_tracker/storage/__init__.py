"""Local persistence collaborators: the JSON project store and CSV I/O."""
