"""Core infrastructure: configuration, exceptions, logging, CLI."""
