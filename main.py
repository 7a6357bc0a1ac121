"""
Entry point for the Book Catalog Service
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

# Import the FastAPI application
from app import app
from config.settings import HOST, PORT, MONGODB_URI
from utils.helpers import redact_uri

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Book Catalog API on http://{HOST}:{PORT}")
    logger.info(f"MongoDB: {redact_uri(MONGODB_URI)}")
    uvicorn.run(app, host=HOST, port=PORT)
