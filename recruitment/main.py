from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from recruitment.database import engine, Base, init_db
from recruitment.all_models import *  # Ensure all models are imported
from recruitment.core.logger_setup import setup_logger
from recruitment.core.config import settings
from recruitment.core.errors import register_exception_handlers

# Feature Routers
from recruitment.auth.endpoints import router as auth_router
from recruitment.jobs.endpoints import router as jobs_router
from recruitment.applications.endpoints import router as applications_router
from recruitment.candidates.endpoints import router as candidate_router
from recruitment.companies.endpoints import router as companies_router
from recruitment.admin_actions.endpoints import router as admin_actions_router
from recruitment.uploads.endpoints import router as upload_router
import uvicorn

# Set up the logger
logger = setup_logger(__name__)

# Initialize the FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Create database tables
try:
    init_db(Base)
except Exception as e:
    logger.error(f"Failed to initialize database: {str(e)}")
    raise

# Include routers
app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(jobs_router, prefix="/api/jobs", tags=["Jobs"])
app.include_router(applications_router, prefix="/api/applications", tags=["Applications"])
app.include_router(candidate_router, prefix="/api/candidate", tags=["Candidate"])
app.include_router(companies_router, prefix="/api/companies", tags=["Companies"])
app.include_router(admin_actions_router, prefix="/api/admin-actions", tags=["Admin-Actions"])
app.include_router(upload_router, prefix="/api/upload", tags=["Upload"])


@app.get("/", tags=["Root"])
async def default():
    logger.info("Received request to the root endpoint.")
    return {
        "Welcome": "Recruitment-Platform-Backend",
        "Debug": settings.DEBUG,
        "Database": settings.DATABASE_TYPE
    }


@app.get("/health", tags=["Root"])
async def health_check():
    logger.info("Health check endpoint accessed.")
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(
        "recruitment.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG
    )
