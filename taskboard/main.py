"""
Main FastAPI application
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select

from taskboard.config import get_settings
from taskboard.database import engine, Base, AsyncSessionLocal
from taskboard.errors import TaskboardError
from taskboard.models import Category
from taskboard.api import users, categories, todos
from taskboard.utils.helpers import DEFAULT_CATEGORIES
from taskboard.utils.logger import get_logger

settings = get_settings()
logger = get_logger("taskboard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")

    # Seed a starter set of categories on an empty database
    if settings.SEED_DEFAULT_CATEGORIES:
        async with AsyncSessionLocal() as session:
            result = await session.execute(select(Category))
            if not result.scalars().first():
                for name, color in DEFAULT_CATEGORIES:
                    session.add(Category(name=name, color=color))
                await session.commit()
                logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")

    yield

    await engine.dispose()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskboardError)
async def taskboard_error_handler(request: Request, exc: TaskboardError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests with the same {"error": ...} body as domain errors"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{where}: {first.get('msg')}" if where else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


# Include routers
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(categories.router, prefix="/categories", tags=["Categories"])
app.include_router(todos.router, prefix="/todos", tags=["Todos"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "taskboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
