"""Configuration, errors, logging, parsing, validation and storage."""
