"""
Configuration Validation for Post Remixer Application

This module contains configuration validation logic. The store credentials
are checked at startup; the generation credential is only checked when a
generation is requested, so it is reported here as a warning.
"""

from utils.exceptions import ConfigurationError
from utils.logger import get_logger

logger = get_logger(__name__)


def validate_store_settings():
    """
    Validate that the saved posts store is configured.

    Raises:
        ConfigurationError: If required database settings are missing.
    """
    # Import settings here to avoid circular imports
    from config import settings

    errors = []

    required_vars = [
        ("DB_SERVER", settings.DB_SERVER),
        ("DB_NAME", settings.DB_NAME),
        ("DB_USER", settings.DB_USER),
        ("DB_PASSWORD", settings.DB_PASSWORD)
    ]

    for var_name, var_value in required_vars:
        if not var_value:
            errors.append(f"Missing required environment variable: {var_name}")

    if not settings.DB_CONNECTION_STRING:
        errors.append("Database connection string could not be built. Check DB_SERVER, DB_NAME, DB_USER, DB_PASSWORD.")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def validate_settings(require_store: bool = True):
    """
    Validate that all required settings are properly configured.

    Args:
        require_store: Whether the database store must be configured.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    from config import settings

    errors = []

    if require_store:
        try:
            validate_store_settings()
        except ConfigurationError as e:
            errors.append(str(e).replace("Configuration validation failed:\n", "").strip())

    if not settings.GOOGLE_AI_API_KEY:
        logger.warning("GOOGLE_AI_API_KEY is not set; generation requests will fail until it is configured.")

    # Validate numeric settings are within reasonable bounds
    numeric_validations = [
        ("POST_COUNT", settings.POST_COUNT, 1, 10),
        ("POST_CHARACTER_LIMIT", settings.POST_CHARACTER_LIMIT, 50, 500),
        ("GENERATION_MAX_TOKENS", settings.GENERATION_MAX_TOKENS, 64, 65536),
    ]

    for name, value, min_val, max_val in numeric_validations:
        if value < min_val or value > max_val:
            errors.append(f"{name} must be between {min_val} and {max_val}, got {value}")

    if not settings.SEGMENT_DELIMITER:
        errors.append("SEGMENT_DELIMITER must not be empty")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def get_config_summary() -> dict:
    """
    Returns a summary of current configuration (without sensitive values).
    Useful for logging startup state.
    """
    from config import settings

    return {
        "generation": {
            "configured": bool(settings.GOOGLE_AI_API_KEY),
            "model": settings.GENERATION_MODEL,
            "max_tokens": settings.GENERATION_MAX_TOKENS,
        },
        "database": {
            "server": settings.DB_SERVER[:20] + "..." if settings.DB_SERVER and len(settings.DB_SERVER) > 20 else settings.DB_SERVER,
            "database": settings.DB_NAME,
        },
        "post_settings": {
            "post_count": settings.POST_COUNT,
            "char_limit": settings.POST_CHARACTER_LIMIT,
            "delimiter": settings.SEGMENT_DELIMITER,
        },
    }
