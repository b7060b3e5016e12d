"""SSB practice content API."""
