from contextlib import asynccontextmanager
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from config import settings
from middleware.rate_limit import RateLimitMiddleware, RateLimitStore
from middleware.static_assets import StaticAssetsMiddleware
from repositories.user_repository import FileUserStore, UserStore
import logging
import uvicorn

# =====================================================
# * Routers
# =====================================================
from routes.user_routes import router as user_router
from routes.page_routes import router as page_router, not_found_handler

# =====================================================
# * Global logging setup
# =====================================================
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)
logger = logging.getLogger("main")

# 🔇 Uvicorn's access log is too chatty at INFO
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# =====================================================
# * Startup message
# =====================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    # uvicorn logs the bound address itself
    logger.info(f"✅ {settings.PROJECT_NAME} ready, serving users from {type(app.state.user_store).__name__}")
    yield


# =====================================================
# * Application factory
# =====================================================
def create_app(data_dir=None, public_dir=None, store: UserStore = None,
               rate_limiter: RateLimitStore = None, trust_proxy: bool = None) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        # kept under /api so "/docs" stays a valid username
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json"
    )

    if store is None:
        store = FileUserStore(data_dir or settings.DATA_DIR)
    if rate_limiter is None:
        rate_limiter = RateLimitStore(
            max_requests=settings.RATE_LIMIT_MAX,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        )
    app.state.user_store = store
    app.state.rate_limiter = rate_limiter

    # Last added runs first: rate limit -> static assets -> routers
    app.add_middleware(StaticAssetsMiddleware, directory=public_dir or settings.PUBLIC_DIR)
    app.add_middleware(
        RateLimitMiddleware,
        store=app.state.rate_limiter,
        trust_proxy=settings.TRUST_PROXY if trust_proxy is None else trust_proxy,
    )

    # /api/users must be registered before the "/{username}" catch-all
    app.include_router(user_router, prefix="/api/users", tags=["Users API"])
    app.include_router(page_router, tags=["Pages"])
    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    logger.info("📜 Routers registered:")
    logger.info(" - /api/users -> UserRouter")
    logger.info(" - / , /{username} -> PageRouter")
    return app


app = create_app()


# =====================================================
# * Entrypoint
# =====================================================
def main(port: int = None):
    port = port or settings.PORT
    logger.info(f"🌍 Server is running on http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
