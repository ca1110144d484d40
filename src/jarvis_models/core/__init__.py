"""Core domain models, enumerations and encodings."""
