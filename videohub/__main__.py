"""
Entry point for running VideoHub as a module.
"""

from .main import main

if __name__ == "__main__":
    main()
