from .contact import ContactEcho, ContactResponse, ContactSubmission  # noqa: F401
