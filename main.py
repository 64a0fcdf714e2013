import sys
import logging
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from config.database import get_db
from config.settings import settings
from config.logging_config import setup_logging
from database.init_db import init_db, seed_demo_accounts

setup_logging()
logger = logging.getLogger(__name__)

ENDPOINTS = [
    "GET /health",
    "GET /init",
    "GET /stats",
    "GET /reports/{type}",
    "POST /api/auth/register",
    "POST /api/auth/login",
    "GET /api/events",
    "GET /api/dashboard",
    "GET /api/notifications",
    "WS /api/notifications/ws",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s starting (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
# CORS: use our parsed list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(OperationalError)
@app.exception_handler(InterfaceError)
async def store_unavailable_handler(request: Request, exc: Exception):
    logger.error("database unavailable during %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Store unavailable"},
    )


#load all routes
def load_routes(directory: Path):
    """Collect `router` (mounted under /api) and `root_router` (site root) from every *_routes.py."""
    import importlib.util
    routers, root_routers = [], []
    for item in sorted(directory.rglob("*_routes.py")):
        spec = importlib.util.spec_from_file_location(item.stem, str(item))
        module = importlib.util.module_from_spec(spec)
        sys.modules[item.stem] = module
        spec.loader.exec_module(module)
        if hasattr(module, "router"):
            routers.append(module.router)
        if hasattr(module, "root_router"):
            root_routers.append(module.root_router)
    return routers, root_routers


api_routers, root_routers = load_routes(Path(__file__).parent / "api")
for router in api_routers:
    app.include_router(router, prefix="/api")
for router in root_routers:
    app.include_router(router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": settings.APP_NAME}


@app.get("/init")
def initialize(db: Session = Depends(get_db)):
    """Create missing tables and seed the demo accounts; safe to call repeatedly."""
    try:
        init_db(db.get_bind())
        seed_demo_accounts(db)
    except Exception as exc:
        db.rollback()
        logger.exception("initialization failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(exc)},
        )
    return {"success": True, "message": "Database initialized successfully"}


# Registered last so every real route wins
@app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def capabilities(path: str):
    return {"message": "SRCS Volunteer Management System API", "endpoints": ENDPOINTS}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT or 8000, reload=settings.DEBUG)
