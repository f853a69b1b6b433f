from .expenses import router as expenses_router
from .health import router as health_router
from .users import router as users_router

__all__ = ["expenses_router", "health_router", "users_router"]
