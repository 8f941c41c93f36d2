"""Core package: configuration, exceptions and the provider interface."""
