"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from otp_service.api.router import router as otp_router
from otp_service.api.router import validation_exception_handler
from otp_service.config import Settings, public_base_url, settings, split_addr
from otp_service.services.otp_service import OTPService
from otp_service.stores.base import OTPStore
from otp_service.stores.memory_store import InMemoryOTPStore
from otp_service.stores.redis_store import RedisOTPStore

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


def build_store(cfg: Settings) -> OTPStore:
    """Create the expiring store selected by ``store_backend``."""
    if cfg.store_backend == "memory":
        logger.warning("Using in-memory OTP store; codes are not shared across processes")
        return InMemoryOTPStore()
    if cfg.store_backend != "redis":
        raise ValueError(f"unknown store backend {cfg.store_backend!r}")
    return RedisOTPStore.from_addr(
        cfg.redis_addr,
        password=cfg.redis_password,
        db=cfg.redis_db,
        socket_timeout=cfg.redis_socket_timeout,
    )


def create_app(store: OTPStore | None = None, cfg: Settings | None = None) -> FastAPI:
    """Build the application.

    When *store* is given it is used as-is (and left open on shutdown);
    otherwise one is built from *cfg* at startup and must answer a ping
    before the app accepts traffic.  *cfg* defaults to the process-wide
    settings.
    """
    if cfg is None:
        cfg = settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle hook."""
        logger.info("Starting %s …", cfg.app_name)
        owned = None
        try:
            if store is None:
                owned = build_store(cfg)
                await owned.ping()
                logger.info("Store ready (backend=%s, addr=%s)", cfg.store_backend, cfg.redis_addr)
                app.state.otp_service = _make_service(owned, cfg)

            logger.info("OTPs expire after %ss", app.state.otp_service.ttl_seconds)
            base = public_base_url(cfg.addr)
            logger.info("Swagger UI available at: %s/swagger/", base)
            logger.info("Swagger spec available at: %s/swagger.json", base)
            yield
            logger.info("Shutting down %s …", cfg.app_name)
        finally:
            if owned is not None:
                await owned.close()

    app = FastAPI(
        title=cfg.app_name,
        description="Issue and validate one-time passcodes backed by an expiring store",
        version="0.1.0",
        docs_url="/swagger/",
        openapi_url="/swagger.json",
        redoc_url=None,
        lifespan=lifespan,
    )
    if store is not None:
        app.state.otp_service = _make_service(store, cfg)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(otp_router)

    @app.get("/healthz", response_class=PlainTextResponse)
    async def health_check():
        """Simple liveness probe."""
        return "ok"

    return app


def _make_service(store: OTPStore, cfg: Settings) -> OTPService:
    return OTPService(
        store,
        digits=cfg.otp_digits,
        ttl_seconds=cfg.otp_ttl_seconds,
        key_prefix=cfg.otp_key_prefix,
    )


app = create_app()


def run() -> None:
    """Console entry point: serve the app on ``settings.addr``."""
    host, port = split_addr(settings.addr)
    logger.info("server listening on %s (store=%s)", settings.addr, settings.store_backend)
    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    run()
