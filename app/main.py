from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from app.routes import (
    events, categories, comments, attendance, ratings,
    committee, expenses, interests, dashboard, auth_router
)
from app.models import Base
from app.database import engine
from app.config import settings
import logging
import sys

LOG_LEVEL = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)"
stream_handler = logging.StreamHandler(sys.stdout)
stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
logging.basicConfig(level=LOG_LEVEL, handlers=[stream_handler], force=True)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Event Hub API",
    description="Events, categories, comments, attendance, ratings and organizer tools",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(events.router, tags=["Events"])
app.include_router(categories.router, tags=["Categories"])
app.include_router(comments.router, tags=["Comments"])
app.include_router(attendance.router, tags=["Attendance"])
app.include_router(ratings.router, tags=["Ratings"])
app.include_router(dashboard.router, tags=["Dashboard"])
app.include_router(committee.router, tags=["Organizer"])
app.include_router(expenses.router, tags=["Organizer"])
app.include_router(interests.router, tags=["Interests"])
app.include_router(auth_router.router, tags=["Authentication"])


def describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse({"error": describe_validation_error(exc)}, status_code=400)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error while processing {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


@app.get("/")
def root():
    return "Backend running"

@app.on_event("startup")
async def startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

if __name__ == "__main__":
    uvicorn.run("app.main:app", reload=True)
