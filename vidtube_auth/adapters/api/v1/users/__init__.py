from .account import router

__all__ = ["router"]
