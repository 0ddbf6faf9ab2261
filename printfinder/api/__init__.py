from printfinder.api.cards import router as cards_router
from printfinder.api.convert import router as convert_router
from printfinder.api.health import router as health_router

__all__ = [
    "cards_router",
    "convert_router",
    "health_router",
]
