"""
Domain exceptions for the asset lifecycle

Every failure a lifecycle command can produce is one of these. Each carries a
stable ``kind`` that the API layer turns into a status code.
"""


class LifecycleDomainError(Exception):
    """Base exception for all lifecycle domain errors"""
    kind = 'DomainError'

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {'error': self.kind, 'message': self.message}
        if self.details:
            body['details'] = self.details
        return body


class NotFoundError(LifecycleDomainError):
    """Raised when a referenced entity does not exist"""
    kind = 'NotFound'


class InvalidStateError(LifecycleDomainError):
    """Raised when a command is illegal for the entity's current state"""
    kind = 'InvalidState'


class InvalidInputError(LifecycleDomainError):
    """Raised when a field is malformed or out of range"""
    kind = 'InvalidInput'


class ConflictError(LifecycleDomainError):
    """Raised when a command would break an invariant or lost a race"""
    kind = 'Conflict'


class ForbiddenError(LifecycleDomainError):
    """Raised when the caller's role lacks the permission"""
    kind = 'Forbidden'


class InactiveError(LifecycleDomainError):
    """Raised when a referenced employee or location is deactivated"""
    kind = 'Inactive'


class AssetNotAvailableError(InvalidStateError):
    """Raised when assigning an asset that is not Available"""
    pass


class AssignmentAlreadyReturnedError(InvalidStateError):
    """Raised when returning an assignment that is already closed"""
    pass


class StatusTransitionError(InvalidStateError):
    """Raised when an administrative status edit is not allowed"""
    pass


class ActiveAssignmentConflictError(ConflictError):
    """Raised when an active assignment blocks the command"""
    pass


class StaleAssetError(ConflictError):
    """Raised when another command changed the asset first"""
    pass
