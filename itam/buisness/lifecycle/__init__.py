"""
Asset lifecycle business logic

LifecycleEngine is the only writer of asset status and assignment state.
TimelineProjector and AuditLogProjector are read-side projections of the
lifecycle event log the engine appends to.
"""

from itam.buisness.lifecycle.caller import Caller
from itam.buisness.lifecycle.engine import LifecycleEngine
from itam.buisness.lifecycle.timeline import Timeline, TimelineEntry, TimelineProjector
from itam.buisness.lifecycle.errors import (
    LifecycleDomainError,
    NotFoundError,
    InvalidStateError,
    InvalidInputError,
    ConflictError,
    ForbiddenError,
    InactiveError,
)

__all__ = [
    'Caller',
    'LifecycleEngine',
    'Timeline',
    'TimelineEntry',
    'TimelineProjector',
    'LifecycleDomainError',
    'NotFoundError',
    'InvalidStateError',
    'InvalidInputError',
    'ConflictError',
    'ForbiddenError',
    'InactiveError',
]
