"""
Configuration settings for the Book Catalog Service
"""

import os
import logging

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))

# MongoDB configuration
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/bookdb")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "bookdb")  # Used when the URI names no database
BOOKS_COLLECTION = os.getenv("BOOKS_COLLECTION", "books")
MONGODB_TIMEOUT_MS = int(os.getenv("MONGODB_TIMEOUT_MS", 5000))

# CORS settings - the public search demo calls the API from another origin
ALLOWED_ORIGINS = [
    origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()
]

if not ALLOWED_ORIGINS:
    logger.warning("ALLOWED_ORIGINS is empty - cross-origin requests will be rejected")
