"""Schema editor kit tests."""
