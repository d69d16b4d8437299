"""Contact form relay.

Validates, sanitizes and forwards static-site contact submissions to a
configured email provider.
"""

__version__ = "1.0.0"
