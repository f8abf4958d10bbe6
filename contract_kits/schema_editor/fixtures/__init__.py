"""Contract fixtures for the schema editor kit."""
