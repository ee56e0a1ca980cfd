"""
Data Models Package

This package contains the Pydantic models and plain data classes used
throughout the portal.

Models:
- Rental application draft, record and dashboard summary
- Occupants and attachment references
- Locally selected files
- Authenticated users, roles and session state
"""

from .application_models import (
    ApplicationDraft,
    ApplicationRecord,
    ApplicationSummary,
    Attachment,
    LocalFile,
    Occupant,
)
from .user_models import AuthUser, Role, SessionState, SessionStatus

__all__ = [
    'ApplicationDraft',
    'ApplicationRecord',
    'ApplicationSummary',
    'Attachment',
    'LocalFile',
    'Occupant',
    'AuthUser',
    'Role',
    'SessionState',
    'SessionStatus',
]
