from .users import router as users_router
from .dashboard import router as dashboard_router
from .units import router as units_router
from .maintenance import router as maintenance_router
from .expenses import router as expenses_router
from .board import router as board_router
from .calendar import router as calendar_router

__all__ = [
    "users_router",
    "dashboard_router",
    "units_router",
    "maintenance_router",
    "expenses_router",
    "board_router",
    "calendar_router",
]
