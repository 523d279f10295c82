"""Core logic: version records, refresh, installation and removal."""
