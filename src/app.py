"""
Book Catalog API Server
CRUD and search over a single MongoDB collection of books
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import ALLOWED_ORIGINS
from database.connection import init_database, close_database
from api.routes import health, books, seed
from utils.error_handling import setup_error_handling

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup fails if MongoDB is unreachable"""
    await init_database()
    yield
    await close_database()

# FastAPI app initialization
app = FastAPI(
    title="Book Catalog API",
    description="REST API for creating, searching, updating and deleting book records",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials="*" not in ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Setup centralized error handling
setup_error_handling(app)

# Include API routes
app.include_router(health.router, tags=["Health"])
app.include_router(books.router, prefix="/books", tags=["Books"])
app.include_router(seed.router, tags=["Seed"])

# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
