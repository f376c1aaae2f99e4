from explainmycard.api.annotate import router as annotate_router
from explainmycard.api.explain import router as explain_router
from explainmycard.api.health import router as health_router

__all__ = [
    "annotate_router",
    "explain_router",
    "health_router",
]
