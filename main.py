"""
Entry point for the Movies Backend data layer: applies the database schema
"""

import sys
import os
import asyncio
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from database.connection import init_database, close_database
from database.schema import apply_schema

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

async def migrate():
    """Create the user_info and movies tables if they are missing"""
    pool = await init_database()
    try:
        async with pool.acquire() as conn:
            await apply_schema(conn)
    finally:
        await close_database()

if __name__ == "__main__":
    logger.info("Applying Movies Backend schema")
    asyncio.run(migrate())
