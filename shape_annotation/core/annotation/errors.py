class UserInputRejected(ValueError):
    """A user request that cannot be honoured; the document is left untouched."""
