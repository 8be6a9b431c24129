"""Application exceptions."""


class CoffeeRunError(Exception):
    """Base exception for the storefront."""

    pass


class ModelValidationError(CoffeeRunError):
    """A record failed validation on the write path."""

    def __init__(self, errors):
        self.errors = errors
        fields = ', '.join(sorted(errors))
        super().__init__(f'Validation failed for: {fields}')


class NotAuthorizedError(CoffeeRunError):
    """The current user may not perform the requested action."""

    message = 'You are not authorized to perform this action.'

    def __init__(self, action=None, resource=None):
        self.action = action
        self.resource = resource
        super().__init__(self.message)


class RateLimitExceededError(CoffeeRunError):
    """Too many credit applications for one identity in the window."""

    message = 'Too many applications submitted. Please try again later.'

    def __init__(self):
        super().__init__(self.message)
