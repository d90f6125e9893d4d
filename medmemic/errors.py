# FILE: medmemic/errors.py

class MedMemicError(Exception):
    """Base class for errors surfaced to the user by a workflow."""
    pass


class AuthenticationError(MedMemicError):
    """Invalid credentials, duplicate signup e-mail or rejected access code."""
    pass


class MutationError(MedMemicError):
    """A create, update or delete call failed."""
    pass


class UploadError(MedMemicError):
    """A blob storage operation failed."""
    pass
