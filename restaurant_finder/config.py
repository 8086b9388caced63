"""
Centralized configuration for the application.
This module contains all configuration classes and settings used throughout the application.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Get workspace root
WORKSPACE_ROOT = Path(__file__).parent.parent.absolute()

# ======================
# LLM Configuration
# ======================

@dataclass
class LLMConfig:
    """Language Model Configuration"""
    model_name: str = field(default_factory=lambda: os.getenv("MODEL_NAME", "gemini-2.0-flash"))
    temperature: float = field(default_factory=lambda: float(os.getenv("TEMPERATURE", "0")))
    api_key: str = field(default_factory=lambda: os.getenv("GOOGLE_API_KEY", ""))

# ======================
# Bounding Box Store Configuration
# ======================

@dataclass
class SupabaseConfig:
    """Hosted table holding one bounding box row per state/county"""
    url: str = field(default_factory=lambda: os.getenv("SUPABASE_URL", ""))
    private_key: str = field(default_factory=lambda: os.getenv("SUPABASE_PRIVATE_KEY", ""))
    table: str = field(default_factory=lambda: os.getenv("BOUNDING_BOX_TABLE", "Bounding Boxes"))
    state_column: str = "STATE_NAME"
    timeout: float = field(default_factory=lambda: float(os.getenv("SUPABASE_TIMEOUT", "30")))

# ======================
# Places Configuration
# ======================

@dataclass
class PlacesConfig:
    """Google Places API (New) settings"""
    api_key: str = field(default_factory=lambda: os.getenv("GOOGLE_MAPS_API_KEY", ""))
    base_url: str = field(default_factory=lambda: os.getenv("PLACES_BASE_URL", "https://places.googleapis.com/v1"))
    category: str = "restaurant"
    page_size: int = field(default_factory=lambda: int(os.getenv("PLACES_PAGE_SIZE", "20")))  # API maximum is 20
    timeout: float = field(default_factory=lambda: float(os.getenv("PLACES_TIMEOUT", "30")))

# ======================
# Lookup Configuration
# ======================

@dataclass
class LookupConfig:
    """Retry budget for the bounding box lookup"""
    max_attempts: int = field(default_factory=lambda: int(os.getenv("LOOKUP_MAX_ATTEMPTS", "3")))

# ======================
# Main Application Configuration
# ======================

@dataclass
class AppConfig:
    """Main Application Configuration"""
    llm: LLMConfig = field(default_factory=LLMConfig)
    supabase: SupabaseConfig = field(default_factory=SupabaseConfig)
    places: PlacesConfig = field(default_factory=PlacesConfig)
    lookup: LookupConfig = field(default_factory=LookupConfig)
    log_dir: Path = field(default_factory=lambda: Path(os.getenv("LOG_DIR", "logs")))

    def validate(self):
        """Validate configuration values."""
        if not self.llm.model_name:
            raise ValueError("model_name must be specified")
        if self.llm.temperature < 0 or self.llm.temperature > 2:
            raise ValueError("temperature must be between 0 and 2")
        if not self.llm.api_key:
            raise ValueError(
                "GOOGLE_API_KEY environment variable is not set. "
                "Please set it in your .env file"
            )
        if not self.supabase.url or not self.supabase.private_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_PRIVATE_KEY environment variables must be set. "
                "Please set them in your .env file"
            )
        if not self.places.api_key:
            raise ValueError(
                "GOOGLE_MAPS_API_KEY environment variable is not set. "
                "Please set it in your .env file"
            )
        if self.places.page_size < 1 or self.places.page_size > 20:
            raise ValueError("page_size must be between 1 and 20")
        if self.lookup.max_attempts < 1:
            raise ValueError("max_attempts must be positive")

# ======================
# Create Configuration Instances
# ======================

APP_CONFIG = AppConfig()
