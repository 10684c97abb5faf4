from .movies import router as movies_router
