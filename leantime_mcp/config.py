"""
Configuration loading.

Explicit values (CLI flags) win over environment variables. A ``.env`` file in
the working directory is read as a fallback and never overrides variables that
are already set in the environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from leantime_mcp.errors import ConfigurationError

logger = logging.getLogger(__name__)

URL_ENV = "LEANTIME_URL"
API_KEY_ENV = "LEANTIME_API_KEY"


@dataclass(frozen=True)
class Config:
    service_url: str
    api_key: str


def normalize_url(url: str) -> str:
    """Strip a single trailing slash."""
    return url[:-1] if url.endswith("/") else url


def load_config(url: Optional[str] = None, api_key: Optional[str] = None, use_dotenv: bool = True) -> Config:
    """
    Resolve the Leantime URL and API key.

    Args:
        url: Explicit service URL, overrides LEANTIME_URL
        api_key: Explicit API key, overrides LEANTIME_API_KEY
        use_dotenv: Read a .env file before looking at the environment

    Raises:
        ConfigurationError: if either setting is empty after precedence is applied
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    resolved_url = url or os.getenv(URL_ENV)
    resolved_key = api_key or os.getenv(API_KEY_ENV)

    missing = []
    if not resolved_url:
        missing.append(URL_ENV)
    if not resolved_key:
        missing.append(API_KEY_ENV)

    if missing:
        raise ConfigurationError(
            f"{' and '.join(missing)} {'is' if len(missing) == 1 else 'are'} not configured. "
            "Pass it on the command line or set it in your .env file or environment variables.",
            missing=missing,
        )

    config = Config(service_url=normalize_url(resolved_url), api_key=resolved_key)
    logger.debug("Leantime endpoint resolved to %s", config.service_url)
    return config
