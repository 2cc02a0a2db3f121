"""Integration tests for ddfloppy."""
