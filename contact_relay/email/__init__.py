"""Email dispatch for contact submissions.

One provider is active at a time, selected by EMAIL_PROVIDER.
"""

from .base import EmailDispatcher  # noqa: F401
from .factory import build_dispatcher  # noqa: F401
