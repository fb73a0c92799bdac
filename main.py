#!/usr/bin/env python3
"""
Main entry point for VideoHub.

This script starts the API server with the configuration in config.json.
"""

import sys
import os

# Add the current directory to Python path to import our modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from videohub.main import main

if __name__ == "__main__":
    main()
