"""
Configuration settings for the Movies Backend data layer
"""

import os
import logging

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")

# Connection pool
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 2))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))
# 0 disables prepared-statement caching, needed behind transaction-pooling proxies
DB_STATEMENT_CACHE_SIZE = int(os.getenv("DB_STATEMENT_CACHE_SIZE", 0))

# Upper bound for a single model operation (pool acquire + statement)
QUERY_TIMEOUT_SECONDS = float(os.getenv("QUERY_TIMEOUT_SECONDS", 3))

if not DATABASE_URL:
    logger.warning("DATABASE_URL not set - database pool cannot be initialized")
