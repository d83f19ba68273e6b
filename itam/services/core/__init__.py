"""
Core Services
Read-side services for assets, assignments, dashboards, reports and
reference data.

These services:
- Build and filter list queries
- Aggregate counts for display
- Never modify state
"""

from .asset_service import AssetService
from .assignment_service import AssignmentService
from .dashboard_service import DashboardService
from .report_service import ReportService
from .reference_data_service import EmployeeService, LocationService
from .user_service import UserService

__all__ = [
    'AssetService',
    'AssignmentService',
    'DashboardService',
    'ReportService',
    'EmployeeService',
    'LocationService',
    'UserService',
]
