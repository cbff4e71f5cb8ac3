import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from goalslayer.api.analytics import router as analytics_router
from goalslayer.api.auth import router as auth_router
from goalslayer.api.catalog import router as catalog_router
from goalslayer.api.social import router as social_router
from goalslayer.api.user_goals import router as user_goals_router
from goalslayer.core.config import settings
from goalslayer.core.logger import setup_logging
from goalslayer.db import Base, SessionLocal, engine
# Import models so their tables are registered on Base.metadata
from goalslayer.models.user import User  # noqa: F401
from goalslayer.models.category import Category  # noqa: F401
from goalslayer.models.goal import Goal  # noqa: F401
from goalslayer.models.user_goal import UserGoal  # noqa: F401
from goalslayer.models.achievement import Achievement  # noqa: F401
from goalslayer.models.friendship import Friendship  # noqa: F401
from goalslayer.models.activity import ActivityFeed  # noqa: F401
from goalslayer.models.shared_achievement import SharedAchievement  # noqa: F401
from goalslayer.services.catalog import seed_catalog

setup_logging()
logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create tables and seed the default catalog."""
    Base.metadata.create_all(bind=engine)
    if not settings.seed_catalog:
        return
    db = SessionLocal()
    try:
        seed_catalog(db)
    except Exception:
        db.rollback()
        logger.exception("Error initializing default data")
    finally:
        db.close()


app = FastAPI(title="Goal Slayer")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg"))
    return JSONResponse(status_code=400, content={"message": messages})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# Create DB tables and default categories on startup
init_db()

app.include_router(auth_router)
app.include_router(catalog_router)
app.include_router(user_goals_router)
app.include_router(analytics_router)
app.include_router(social_router)


@app.get("/")
def root():
    return {"message": "Goal Slayer backend is running"}
