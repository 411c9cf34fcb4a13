"""Four ways to log in over one user store: cookie, server session, security context and JWT."""

__version__ = "0.1.0"
