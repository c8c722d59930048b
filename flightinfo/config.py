"""
Configuration management for the Flight Information API.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from typing import List, Union

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class DatabaseConfig:
    """Database configuration."""
    url: str = os.getenv('DATABASE_URL', 'sqlite:///flights.db')


@dataclass(frozen=True)
class PaginationConfig:
    """Paging limits for list endpoints."""
    default_page_size: int = int(os.getenv('DEFAULT_PAGE_SIZE', '10'))
    max_page_size: int = int(os.getenv('MAX_PAGE_SIZE', '100'))


@dataclass(frozen=True)
class ApiConfig:
    """HTTP surface settings."""
    cors_origins: str = os.getenv('CORS_ORIGINS', '*')

    @property
    def origins(self) -> Union[str, List[str]]:
        """'*' or the comma-separated CORS_ORIGINS as a list."""
        if self.cors_origins.strip() == '*':
            return '*'
        return [o.strip() for o in self.cors_origins.split(',') if o.strip()]


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    database: DatabaseConfig
    pagination: PaginationConfig
    api: ApiConfig

    # Flask settings
    secret_key: str
    debug: bool
    port: int


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        database=DatabaseConfig(),
        pagination=PaginationConfig(),
        api=ApiConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
        port=int(os.getenv('PORT', '5000')),
    )


# Singleton instance
config = load_config()
