from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tour_pricing.config import settings
from tour_pricing.core.logging import configure_logging
from tour_pricing.availability import router as availability_router
from tour_pricing.packages import router as packages_router

configure_logging(settings.LOG_LEVEL)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Package pricing and room availability API",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    availability_router,
    prefix=f"{settings.API_V1_STR}/availability",
    tags=["Room Availability"]
)

app.include_router(
    packages_router,
    prefix=f"{settings.API_V1_STR}/pricing",
    tags=["Package Pricing"]
)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": settings.PROJECT_NAME,
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
