"""
Configuration management for Sheet Responder.

Loads environment variables from .env file and provides typed access to configuration.
Data source settings live in infra.config.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


class Config:
    """Configuration class for Sheet Responder."""

    # Server
    PORT = int(os.getenv("PORT", "8000"))
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Twilio webhook signing (optional)
    TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN", "")
    TWILIO_VALIDATE_SIGNATURE = os.getenv("TWILIO_VALIDATE_SIGNATURE", "false").lower() == "true"
    # Public webhook URL Twilio signs against, when behind a proxy
    TWILIO_WEBHOOK_URL = os.getenv("TWILIO_WEBHOOK_URL", "")

    @classmethod
    def missing_settings(cls) -> list[str]:
        """Required settings that are not configured."""
        from infra.config import get_config

        missing = get_config().missing_settings()
        if cls.TWILIO_VALIDATE_SIGNATURE and not cls.TWILIO_AUTH_TOKEN:
            missing.append("TWILIO_AUTH_TOKEN")
        return missing

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        return not cls.missing_settings()


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  Port: {Config.PORT}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"  Signature validation: {'on' if Config.TWILIO_VALIDATE_SIGNATURE else 'off'}")
    missing = Config.missing_settings()
    print(f"\n  Validation: {'✓ PASSED' if not missing else '✗ FAILED'}")
    for name in missing:
        print(f"    missing: {name}")
