import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inventory.config import settings
from inventory.errors import InventoryError

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(settings.log_dir)
if not _LOG_DIR.is_absolute():
    _LOG_DIR = Path(__file__).resolve().parent.parent / _LOG_DIR
_LOG_DIR.mkdir(parents=True, exist_ok=True)

_log_level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "inventory.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("apscheduler").setLevel(logging.WARNING)

from inventory.routers import cities, countries, hotels, images, rooms, seo  # noqa: E402

logger = logging.getLogger(__name__)


async def _run_orphan_audit():
    from inventory.services.orphan_audit import find_orphans
    from inventory.store import entity_store

    try:
        await find_orphans(entity_store)
    except InventoryError as e:
        logger.error(f"Orphan audit failed: {e.message}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: launch background scheduler
    scheduler = None
    if settings.scheduler_enabled:
        scheduler = AsyncIOScheduler()
        scheduler.add_job(
            _run_orphan_audit,
            IntervalTrigger(hours=settings.orphan_audit_interval_hours),
            id="orphan_audit",
        )
        scheduler.start()
        logger.info("Background scheduler started")

    # Seed the option catalogs if empty (dev convenience)
    if settings.seed_on_startup:
        try:
            from inventory.seed import seed
            await seed()
        except Exception as e:
            logger.warning(f"Auto-seed skipped: {e}")

    yield

    # Shutdown
    from inventory.services.cache_service import cache_service
    await cache_service.close()
    if scheduler:
        scheduler.shutdown(wait=False)
        logger.info("Background scheduler stopped")


app = FastAPI(
    title="Hotel Inventory",
    description="Hotel, room, pricing, SEO and gallery inventory API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── Error envelopes ───

@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: [{exc.code}] {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    first = details[0] if details else {"field": None, "message": "Invalid request"}
    body = {"code": "VALIDATION_ERROR", "details": details}
    if first["field"]:
        body["field"] = first["field"]
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": first["message"], "error": body},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "error": {"code": "SERVER_ERROR"},
        },
    )


app.include_router(countries.router, prefix="/api/country", tags=["countries"])
app.include_router(cities.router, prefix="/api/city", tags=["cities"])
app.include_router(hotels.router, prefix="/api/hotel", tags=["hotels"])
app.include_router(rooms.router, prefix="/api/room", tags=["rooms"])
app.include_router(seo.router, prefix="/api/seo-metadata", tags=["seo"])
app.include_router(images.router, prefix="/api/image-collection", tags=["images"])


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "inventory"}
