import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.config import settings
from src.database import Base, engine
from src.exceptions import register_exception_handlers
from src.logging_config import configure_logging
from src.auth import router as auth_router
from src.users import router as users_router
from src.buses import router as buses_router
from src.bookings import router as bookings_router

configure_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("%s started, database %s", settings.PROJECT_NAME, engine.url.render_as_string(hide_password=True))
    yield
    engine.dispose()

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Bus Ticket Booking API",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(
    auth_router.router,
    prefix=f"{settings.API_PREFIX}/auth",
    tags=["Authentication"]
)

app.include_router(
    users_router.router,
    prefix=f"{settings.API_PREFIX}/user",
    tags=["User Profile"]
)

app.include_router(
    buses_router.router,
    prefix=f"{settings.API_PREFIX}/buses",
    tags=["Buses"]
)

app.include_router(
    bookings_router,
    prefix=settings.API_PREFIX,
    tags=["Bookings"]
)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Bus Ticket Booking API",
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
