"""
UI Components Module
Contains the controllers behind each view of the rental application portal.
"""

from .application_form import ApplicationFormController, PendingAttachment
from .auth_forms import AuthFormController
from .landlord_dashboard import LandlordDashboardController
from .tenant_dashboard import TenantDashboardController

__all__ = [
    # Application form
    'ApplicationFormController',
    'PendingAttachment',

    # Authentication views
    'AuthFormController',

    # Dashboards
    'LandlordDashboardController',
    'TenantDashboardController',
]
