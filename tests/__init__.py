"""
Test suite for ddfloppy.

This package contains:
- Unit tests for the floppy registry, mapfile parser, sector mapping,
  settings, report and GUI widgets
- Integration tests loading mapfiles from disk and running the CLI
- Mapfile builders shared by both
"""
