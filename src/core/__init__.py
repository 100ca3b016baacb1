"""Core of the hook: domain types, configuration and the onDefineDomain service."""
