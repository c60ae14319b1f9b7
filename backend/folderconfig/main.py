import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from folderconfig.api import health
from folderconfig.api.endpoints import teams, users
from folderconfig.core.config import settings
from folderconfig.core.errors import DirectoryError, StorageFailure
from folderconfig.core.init_db import init_db
from folderconfig.core.metrics import PrometheusMiddleware, metrics_endpoint
from folderconfig.db.mongodb import close_mongo_connection, connect_to_mongo, get_database

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Assign folders to users through team membership, with optional per-user overrides.

    ## Features
    * **Teams**: named groups with a list of default folders.
    * **Users**: optionally assigned to one team; custom folders replace the team's.
    * **GitHub import**: organisation members are synchronised by GitHub account ID.
    """,
    version="1.0.0",
)

app.add_middleware(PrometheusMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(DirectoryError)
async def directory_error_handler(request: Request, exc: DirectoryError):
    if isinstance(exc, StorageFailure):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are answered with 400, not 422."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"] if part != "body")
        msg = err["msg"].removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "; ".join(messages) or "Invalid request"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log the traceback; never expose it to the client."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


async def run_startup_import():
    """Import GitHub organisation members. Failures never block startup."""
    if not settings.IMPORT_ON_STARTUP:
        return
    if settings.SKIP_GITHUB_IMPORT:
        logger.info("GitHub import skipped (SKIP_GITHUB_IMPORT=true)")
        return
    if not settings.github_import_configured:
        logger.info("GitHub import not configured, skipping import")
        if not settings.GITHUB_TOKEN:
            logger.info("   - GITHUB_TOKEN not set in environment")
        if not settings.GITHUB_ORG:
            logger.info("   - GITHUB_ORG not set in environment")
        return

    from folderconfig.services.directory import DirectoryService
    from folderconfig.services.github import GitHubService
    from folderconfig.services.user_import import import_github_org

    logger.info(f"Importing GitHub users for organisation: {settings.GITHUB_ORG}")
    try:
        directory = DirectoryService(await get_database())
        github = GitHubService(settings.GITHUB_TOKEN, api_url=settings.GITHUB_API_URL)
        summary = await import_github_org(directory, github, settings.GITHUB_ORG)
        if summary.new_logins:
            logger.info(f"New users added: {', '.join(summary.new_logins)}")
        else:
            logger.info("No new users found - all users already exist")
    except Exception as e:
        logger.error(f"Error importing GitHub users: {e}")
        logger.info("Continuing with server startup...")


@app.on_event("startup")
async def startup_event():
    await connect_to_mongo()
    await init_db()
    await run_startup_import()


@app.on_event("shutdown")
async def shutdown_event():
    await close_mongo_connection()


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(teams.router, prefix=f"{settings.API_PREFIX}/teams", tags=["teams"])
app.include_router(users.router, prefix=f"{settings.API_PREFIX}/users", tags=["users"])
app.add_route("/metrics", metrics_endpoint, include_in_schema=False)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/", include_in_schema=False)
async def root():
    return FileResponse(STATIC_DIR / "index.html")
