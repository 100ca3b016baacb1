"""Command-line boundary of the hook sidecar."""
