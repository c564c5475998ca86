"""
# `storefront/main.py` - Application entry point

- Creates the `FastAPI` app, configures logging and CORS (`settings.allowed_origins`, list or `*`).
- Registers the domain error handlers (`core/errors.py`): 400 / 403 / 404 / 409 with a
  `{"detail": ...}` body, and a catch-all 500 that logs the traceback server-side only.

**Public routers:** `/cart`, `/orders`, `/listings`, `/reviews`, `/users`

**Admin routers** (guarded by `require_admin`):
- `GET /orders/admin`, `PUT /orders/{id}/status`
- `POST|PUT|DELETE /listings`
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.config import settings
from storefront.core.errors import register_exception_handlers
from storefront.routers import carts, listings, orders, reviews, users

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title="Jewelry Storefront API",
    description="Cart, checkout and order management for the jewelry storefront.",
    version="1.0.0",
    redirect_slashes=False
)

# Configure CORS (allow front-end domain or all origins as specified)
allow_origins = [origin.strip() for origin in settings.allowed_origins.split(',')] if settings.allowed_origins else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include public routers
app.include_router(carts.router)
app.include_router(orders.router)
app.include_router(listings.router)
app.include_router(reviews.router)
app.include_router(users.router)

# Admin routers share the public prefixes; admin gating is a router dependency
app.include_router(orders.admin_router)
app.include_router(listings.admin_router)


@app.get("/health")
def health():
    return {"status": "ok"}


# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8000, reload=True)
