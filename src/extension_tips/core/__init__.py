"""Core engine, configuration and collaborator interfaces for extension-tips."""
