"""
Main Application Coordinator for VideoHub.

This module wires configuration, logging, storage, the video module and the
API server together.
"""

import logging
import sys
from typing import Optional

from .core.config import Config
from .core.logging_config import setup_logging, get_error_tracker, get_performance_logger
from .core.timezone_utils import log_time_info
from .storage.manager import StorageManager
from .video.integration import create_video_module
from .api.server import APIServer


class VideoHubSystem:
    """Main application coordinator for VideoHub"""

    def __init__(self, config_file: Optional[str] = None, config: Optional[Config] = None, configure_logging: bool = True):
        # Load configuration first (basic logging will be used initially)
        self.config = config or Config(config_file)

        if configure_logging:
            self.logger_setup = setup_logging(log_level=self.config.system.log_level, log_file=self.config.system.log_file)
        self.logger = logging.getLogger(__name__)

        self.error_tracker = get_error_tracker("main_system")
        self.performance_logger = get_performance_logger("main_system")

        with self.performance_logger.measure("system_setup", backend=self.config.database.backend):
            # The mongodb backend needs a connection; it is opened by the API lifespan
            self.storage_manager: Optional[StorageManager] = None
            if self.config.database.backend == "mongodb":
                self.storage_manager = StorageManager(self.config)

            self.video_module = create_video_module(self.config, storage_manager=self.storage_manager)
            self.api_server = APIServer(self.config, self.video_module, storage_manager=self.storage_manager)

        self.logger.info("VideoHub initialized")

    @property
    def app(self):
        return self.api_server.app

    def run(self) -> None:
        """Run the system (blocking call)"""
        log_time_info(self.config.system.timezone, self.logger)
        try:
            self.api_server.run()
        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        except Exception as e:
            self.error_tracker.log_error(e, "api_server")
            raise
        finally:
            self.logger.info("VideoHub stopped")


def create_app(config_file: Optional[str] = None):
    """ASGI application factory (``uvicorn videohub.main:create_app --factory``)"""
    return VideoHubSystem(config_file).app


def main():
    """Main entry point for the application"""
    import argparse

    parser = argparse.ArgumentParser(description="VideoHub API server")
    parser.add_argument("--config", type=str, help="Path to configuration file", default="config.json")
    parser.add_argument("--log-level", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level", default=None)

    args = parser.parse_args()

    config = Config(args.config)
    if args.log_level:
        config.system.log_level = args.log_level

    system = VideoHubSystem(config=config)

    try:
        system.run()
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
