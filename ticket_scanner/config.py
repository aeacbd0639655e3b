"""
Configuration module for the Ticket Scanner app.

Loads environment variables and validates required settings.
"""
import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _normalize_base_path(raw: str) -> str:
    """Turn '', '/', 'tickets/' or '/tickets' into '' or '/tickets'."""
    path = raw.strip().strip("/")
    return f"/{path}" if path else ""


class Settings:
    """Application settings loaded from environment variables."""

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Every route and the static mount live under this prefix (e.g. "/tickets")
    BASE_PATH: str = _normalize_base_path(os.getenv("BASE_PATH", ""))

    # Google Gemini API
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    # Overrides the built-in extraction prompt when set
    GEMINI_PROMPT: str = os.getenv("GEMINI_PROMPT", "")

    # Supabase Configuration
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
    TICKETS_TABLE: str = os.getenv("TICKETS_TABLE", "ticket")
    LINES_TABLE: str = os.getenv("LINES_TABLE", "ticket_line")

    # Session cookie
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "")
    APP_PASSWORD: str = os.getenv("APP_PASSWORD", "")
    SESSION_TTL_DAYS: int = int(os.getenv("SESSION_TTL_DAYS", "7"))

    # Listing and persistence limits
    PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "10"))
    LINE_BATCH_SIZE: int = int(os.getenv("LINE_BATCH_SIZE", "10"))
    MAX_UPLOAD_MB: int = int(os.getenv("MAX_UPLOAD_MB", "10"))

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing.
        """
        required_settings = {
            "GOOGLE_API_KEY": cls.GOOGLE_API_KEY,
            "SUPABASE_URL": cls.SUPABASE_URL,
            "SUPABASE_KEY": cls.SUPABASE_KEY,
            "SESSION_SECRET": cls.SESSION_SECRET,
            "APP_PASSWORD": cls.APP_PASSWORD,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"

    @property
    def SESSION_TTL_SECONDS(self) -> int:
        """Session cookie lifetime in seconds."""
        return self.SESSION_TTL_DAYS * 24 * 60 * 60


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   The app may not work correctly until you configure your .env file.")
        else:
            raise
