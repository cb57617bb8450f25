import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tourism.api import (
    routes_admin,
    routes_auth,
    routes_booking,
    routes_destinations,
    routes_health,
    routes_payments,
    routes_wishlist,
)
from tourism.core.config import settings
from tourism.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PaymentError,
    PaymentNotConfigured,
    TourismError,
    Unauthenticated,
    ValidationFailed,
)
from tourism.core.logging import configure_logging
from tourism.services.payment_client import StripeClient, StripeConfig
from tourism.storage.repository import InMemoryRepository, Repository
from tourism.storage.seed import seed_destinations

logger = logging.getLogger(__name__)

# Most specific first; lookup walks this in order.
ERROR_STATUS = [
    (NotFoundError, 404),
    (ConflictError, 409),
    (ForbiddenError, 403),
    (ValidationFailed, 422),
    (Unauthenticated, 401),
    (PaymentNotConfigured, 503),
    (PaymentError, 502),
]


async def handle_domain_error(request: Request, exc: TourismError) -> JSONResponse:
    status_code = next((code for cls, code in ERROR_STATUS if isinstance(exc, cls)), 400)
    logger.info(
        "%s %s -> %d %s", request.method, request.url.path, status_code, type(exc).__name__
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def create_app(
    repository: Optional[Repository] = None,
    stripe_client: Optional[StripeClient] = None,
) -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TourismError, handle_domain_error)

    if repository is None:
        repository = InMemoryRepository()
        if settings.seed_destinations:
            seed_destinations(repository)

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(routes_auth.router, prefix="/api", tags=["auth"])
    app.include_router(routes_destinations.router, prefix="/api", tags=["destinations"])
    app.include_router(routes_booking.router, prefix="/api", tags=["bookings"])
    app.include_router(routes_wishlist.router, prefix="/api", tags=["wishlist"])
    app.include_router(routes_payments.router, prefix="/api", tags=["payments"])
    app.include_router(routes_admin.router, prefix="/api/admin", tags=["admin"])

    # Inject collaborators into state for dependencies
    app.state.repository = repository
    app.state.stripe_client = stripe_client or StripeClient(StripeConfig.from_settings())
    app.state.settings = settings
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
