"""
Environment-driven settings for ScreenCraft
"""
import os
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

# Model configuration
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GENERATION_TIMEOUT = int(os.getenv("GENERATION_TIMEOUT", "60"))  # seconds

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")

# JWT settings
JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "authenticated")

# Screen defaults (iPhone X class viewport)
DEFAULT_SCREEN_WIDTH = int(os.getenv("DEFAULT_SCREEN_WIDTH", "375"))
DEFAULT_SCREEN_HEIGHT = int(os.getenv("DEFAULT_SCREEN_HEIGHT", "812"))
DEFAULT_SCREEN_NAME = "Generated Screen"
FALLBACK_PROMPT_LIMIT = int(os.getenv("FALLBACK_PROMPT_LIMIT", "100"))
MAX_PROMPT_LENGTH = int(os.getenv("MAX_PROMPT_LENGTH", "4000"))

# Rate limiter housekeeping
RATE_LIMIT_SWEEP_INTERVAL = int(os.getenv("RATE_LIMIT_SWEEP_INTERVAL", "60"))  # seconds

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "screencraft.log")
