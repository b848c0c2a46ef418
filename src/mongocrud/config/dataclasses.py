"""
Configuration Data Classes for the MongoDB connection

Groups connection settings so callers can build them in code (tests,
embedding applications) instead of through environment variables.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from . import Config


@dataclass
class StorageConfig:
    """Connection settings for the document store"""
    mongodb_uri: str = field(default_factory=lambda: Config.MONGODB_URI)
    database_name: str = field(default_factory=lambda: Config.DATABASE_NAME)

    # Client options
    server_selection_timeout_ms: int = field(default_factory=lambda: Config.MONGODB_SERVER_SELECTION_TIMEOUT_MS)
    app_name: Optional[str] = field(default_factory=lambda: Config.MONGODB_APP_NAME)
    tz_aware: bool = field(default_factory=lambda: Config.MONGODB_TZ_AWARE)

    # Extra keyword arguments passed straight to MongoClient
    extra_options: Dict[str, Any] = field(default_factory=dict)

    def client_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``pymongo.MongoClient``"""
        options: Dict[str, Any] = {
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
            "tz_aware": self.tz_aware,
        }
        if self.app_name:
            options["appname"] = self.app_name
        options.update(self.extra_options)
        return options
