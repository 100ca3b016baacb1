"""Codecs for the two hook payloads (VMI JSON, domain XML)."""
