"""
Runtime configuration for Simple Talk.

The backend base URL is read from a .env file at the project root (or the
process environment):

    SIMPLE_TALK_API_URL=https://simple-gje3.onrender.com

We use python-dotenv + os.getenv so deployment URLs stay out of the code.
"""

import os

from dotenv import load_dotenv

from .logger import logger

DEFAULT_API_BASE_URL = "https://simple-gje3.onrender.com"


def load_api_base_url() -> str:
    """Resolve the backend base URL, without a trailing slash."""
    if load_dotenv():
        logger.env_success(".env file loaded")
    else:
        logger.env("No .env file found, using process environment")

    base_url = os.getenv("SIMPLE_TALK_API_URL", "").strip() or DEFAULT_API_BASE_URL
    base_url = base_url.rstrip("/")
    logger.env(f"Backend base URL: {base_url}")
    return base_url


API_BASE_URL = load_api_base_url()
