from .routes import auth_router, health_router, task_router

__all__ = ["auth_router", "health_router", "task_router"]
