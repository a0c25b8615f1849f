"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Feed
    FEED_URL = os.getenv("FEED_URL", "https://jsonplaceholder.typicode.com/posts")
    FEED_PAGE_SIZE = int(os.getenv("FEED_PAGE_SIZE", "3"))

    # Defaults
    DEFAULT_TIMEOUT = float(os.getenv("DEFAULT_TIMEOUT", "10"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
