"""Request, security, and error helpers."""
