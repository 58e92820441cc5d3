from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import cors_origins_from_env, load_settings
from .database import close_pool, init_db, init_pool
from .dependencies import require_admin, require_viewer
from .routes import (
    admin_router,
    auth_router,
    categories_router,
    manuals_router,
    requests_router,
    viewer_auth_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    settings = load_settings()
    print(f"[Portal] Starting server on port {settings.port}")

    # Initialize database
    await init_pool(settings.database_url)
    await init_db()

    yield

    # Cleanup
    await close_pool()
    print("[Portal] Server shutdown complete")


app = FastAPI(
    title="Manual Portal API",
    description="Categorized HR operation manuals with search, admin backend and request intake",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins_from_env(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

viewer_only = [Depends(require_viewer)]
admin_only = [Depends(require_admin)]

app.include_router(viewer_auth_router, prefix="/api/viewer", tags=["viewer-auth"])
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(categories_router, prefix="/api/categories", tags=["categories"], dependencies=viewer_only)
app.include_router(manuals_router, prefix="/api", tags=["manuals"], dependencies=viewer_only)
app.include_router(requests_router, prefix="/api/requests", tags=["requests"], dependencies=viewer_only)
app.include_router(admin_router, prefix="/api/admin", tags=["admin"], dependencies=admin_only)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "manual-portal"}
