#!/usr/bin/env python3
"""Deep Work Terminal - Run the application.

This is the recommended entry point for running the web API.

Usage:
    python run.py
    # Or: python -m deepwork.app

The API will be available at http://localhost:5060/api/session

For the interactive console, use:
    deepwork-console
"""

from deepwork.app import main

if __name__ == "__main__":
    main()
