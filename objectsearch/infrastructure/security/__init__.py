"""Security: JWT verification and principal-backed organizational context."""
