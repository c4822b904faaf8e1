"""
Configuration Settings for Post Remixer

This module centralizes all configuration settings for the Post Remixer application,
including environment variables, API keys, and application constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(dotenv_path=os.path.join(APP_ROOT, '.env'))

# API Keys and Authentication
GOOGLE_AI_API_KEY = os.getenv("GOOGLE_AI_API_KEY")

# Database Settings
DB_SERVER = os.getenv("server", "")
DB_NAME = os.getenv("db", "")
DB_USER = os.getenv("user", "")
DB_PASSWORD = os.getenv("pwd", "")

# Build connection string safely (validation happens in validate_store_settings())
DB_CONNECTION_STRING = (
    f"DRIVER={{ODBC Driver 18 for SQL Server}}; "
    f"SERVER={DB_SERVER}; "
    f"DATABASE={DB_NAME}; "
    f"UID={DB_USER}; "
    f"PWD={DB_PASSWORD}; "
    f"TrustServerCertificate=yes; MARS_Connection=yes;"
) if all([DB_SERVER, DB_NAME, DB_USER, DB_PASSWORD]) else ""

# =============================================================================
# AI Service Settings
# =============================================================================

GENERATION_MODEL = os.getenv("GENERATION_MODEL", "gemini-2.0-flash")
GENERATION_MAX_TOKENS = int(os.getenv("GENERATION_MAX_TOKENS", "1024"))

# Source text longer than this is still sent whole, but a warning is logged
LONG_INPUT_WARNING_LENGTH = 20000

# =============================================================================
# Post Format Settings
# =============================================================================

POST_COUNT = 5                       # Posts requested per generation
POST_CHARACTER_LIMIT = 280           # Character budget per post
SEGMENT_DELIMITER = "|"              # Separates complete thoughts inside a post
MIN_SEGMENTS_PER_POST = 2
MAX_SEGMENTS_PER_POST = 3

# =============================================================================
# Share Settings
# =============================================================================

SHARE_INTENT_URL = "https://twitter.com/intent/tweet?text="
SHARE_PARAGRAPH_BREAK = "\n\n"

# =============================================================================
# Application Settings
# =============================================================================

DEFAULT_STORE = os.getenv("REMIXER_STORE", "database")   # 'database' or 'memory'
LOG_FILE = os.path.join(APP_ROOT, "remixer.log")
