"""Core data model, graph helpers and exceptions."""
