"""
Global constants for CondoManager.

This module contains constant values used across the application, such as
maintenance statuses, the session lifetime and the dashboard list sizes.
"""

# Maintenance request lifecycle: Pending -> Completed, never back
PENDING = "Pending"
COMPLETED = "Completed"

SESSION_MAX_AGE = 14 * 24 * 60 * 60
"""int: Seconds a login lasts, for both the cookie and the server-side entry."""

DEFAULT_PROPERTY_TYPE = "Condo"
"""str: Type given to units added without a full form."""

# Dashboard list sizes
DASHBOARD_MAINTENANCE_LIMIT = 3
DASHBOARD_EVENTS_LIMIT = 5
DASHBOARD_MESSAGES_LIMIT = 3
DASHBOARD_EXPENSES_LIMIT = 5

DISPLAY_DATE_FORMAT = "%A, %B %d, %Y"
"""str: strftime pattern for dates shown to users and matched by search."""
