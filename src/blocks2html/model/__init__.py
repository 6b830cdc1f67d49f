"""Content tree nodes and render configuration."""
