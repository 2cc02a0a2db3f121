"""Unit tests for ddfloppy."""
