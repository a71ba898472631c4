"""Core types, enumerations and exceptions."""
