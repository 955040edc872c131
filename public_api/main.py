import argparse
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from public_api.core import http, settings
from public_api.core.errors import register_error_handlers
from public_api.core.logging import configure_logging
from public_api.listings import router as listings_router
from public_api.users import router as users_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # One pooled upstream client per process.
    await http.init_client()
    try:
        yield
    finally:
        await http.close_client()


app = FastAPI(title="public-api", lifespan=lifespan)

origins = settings.allowed_origins()
if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_error_handlers(app)

app.include_router(listings_router.router, tags=["listings"])
app.include_router(users_router.router, tags=["users"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "public-api gateway"}


def main() -> None:
    import uvicorn

    parser = argparse.ArgumentParser(description="Public API gateway over the listing and user services.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=settings.port())
    parser.add_argument("--user-service-url", default=settings.user_service_url())
    parser.add_argument("--listing-service-url", default=settings.listing_service_url())
    args = parser.parse_args()

    # Settings are read from the environment at call time.
    os.environ["USER_SERVICE_URL"] = args.user_service_url
    os.environ["LISTING_SERVICE_URL"] = args.listing_service_url

    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level().lower())


if __name__ == "__main__":
    main()
