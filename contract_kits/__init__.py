"""Contract editing domain kits."""
