"""
Configuration management for the VideoHub service.

This module handles all configuration settings including the database
connection, media storage credentials, and API server parameters. Values are
loaded from a JSON file and may be overridden through environment variables.
"""

import os
import json
import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, asdict, field
from pathlib import Path
import tempfile

from decouple import config as env, strtobool


@dataclass
class DatabaseConfig:
    """Document database configuration"""

    backend: str = "mongodb"  # mongodb or memory
    uri: str = "mongodb://localhost:27017"
    name: str = "videohub"
    videos_collection: str = "videos"
    users_collection: str = "users"
    server_selection_timeout_ms: int = 5000


@dataclass
class MediaStorageConfig:
    """Remote media storage configuration (S3-compatible bucket)"""

    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    bucket: str = "videohub-media"
    region: str = "auto"
    public_url: str = ""
    temp_dir: str = field(default_factory=lambda: os.path.join(tempfile.gettempdir(), "videohub"))


@dataclass
class SystemConfig:
    """System-wide configuration"""

    log_level: str = "INFO"
    log_file: Optional[str] = "videohub.log"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    timezone: str = "UTC"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    trust_user_header: bool = False  # Only enable behind a gateway that sets X-User-Id


# Environment variable -> (section, attribute, cast)
ENV_OVERRIDES = {
    "STORAGE_BACKEND": ("database", "backend", str),
    "MONGO_URI": ("database", "uri", str),
    "DB_NAME": ("database", "name", str),
    "MEDIA_ENDPOINT_URL": ("media", "endpoint_url", str),
    "MEDIA_ACCESS_KEY_ID": ("media", "access_key_id", str),
    "MEDIA_SECRET_ACCESS_KEY": ("media", "secret_access_key", str),
    "MEDIA_BUCKET": ("media", "bucket", str),
    "MEDIA_PUBLIC_URL": ("media", "public_url", str),
    "MEDIA_TEMP_DIR": ("media", "temp_dir", str),
    "LOG_LEVEL": ("system", "log_level", str),
    "PORT": ("system", "api_port", int),
    "TRUST_USER_HEADER": ("system", "trust_user_header", strtobool),
}


class Config:
    """Main configuration manager"""

    def __init__(self, config_file: Optional[str] = None, apply_env: bool = True):
        self.config_file = config_file or "config.json"
        self.logger = logging.getLogger(__name__)

        # Default configurations
        self.database = DatabaseConfig()
        self.media = MediaStorageConfig()
        self.system = SystemConfig()

        # Load configuration
        self.load_config()
        if apply_env:
            self.apply_env_overrides()

        # Ensure the upload spool directory exists
        self._ensure_temp_directory()

    def load_config(self) -> None:
        """Load configuration from file"""
        config_path = Path(self.config_file)

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    config_data = json.load(f)

                if "database" in config_data:
                    self.database = DatabaseConfig(**config_data["database"])

                if "media" in config_data:
                    self.media = MediaStorageConfig(**config_data["media"])

                if "system" in config_data:
                    self.system = SystemConfig(**config_data["system"])

                self.logger.info(f"Configuration loaded from {config_path}")

            except Exception as e:
                self.logger.error(f"Error loading config from {config_path}: {e}")
        else:
            self.logger.info(f"Config file {config_path} not found, using defaults")
            self.save_config()  # Save default config

    def apply_env_overrides(self) -> None:
        """Override file values with environment variables where set"""
        for var_name, (section, attribute, cast) in ENV_OVERRIDES.items():
            value = env(var_name, default=None)
            if value is None or value == "":
                continue
            try:
                setattr(getattr(self, section), attribute, cast(value))
                self.logger.debug(f"Config {section}.{attribute} overridden from {var_name}")
            except ValueError:
                self.logger.warning(f"Ignoring invalid value for {var_name}: {value!r}")

    def save_config(self) -> None:
        """Save current configuration to file"""
        try:
            with open(self.config_file, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except Exception as e:
            self.logger.error(f"Error saving config to {self.config_file}: {e}")

    def _ensure_temp_directory(self) -> None:
        """Ensure the temp directory for incoming uploads exists"""
        try:
            Path(self.media.temp_dir).mkdir(parents=True, exist_ok=True)
        except Exception as e:
            self.logger.error(f"Error creating temp directory {self.media.temp_dir}: {e}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {"database": asdict(self.database), "media": asdict(self.media), "system": asdict(self.system)}
