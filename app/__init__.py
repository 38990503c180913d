"""User directory service: JWT login and role-gated user administration."""

__version__ = "0.1.0"
