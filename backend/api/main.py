"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import entries, geocoding
from db import init_db
from settings import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Create app
app = FastAPI(
    title="HobbyMap API",
    description="API for recording hobby entries and placing them on a map",
    version="0.1.0",
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(entries.router, prefix="/entries", tags=["entries"])
app.include_router(geocoding.router, prefix="/geocode", tags=["geocoding"])


@app.on_event("startup")
def startup_event():
    """Initialize database tables on startup."""
    init_db()


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "HobbyMap API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
