#!/usr/bin/env python3
"""Simple script to run the Flask application."""
import logging

from puckdraft.api.app import app, start_background_scheduler
from puckdraft.services.draft_config import API_DEBUG, API_HOST, API_PORT

if __name__ == '__main__':
    logging.basicConfig(
        level=logging.DEBUG if API_DEBUG else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    print("=" * 60)
    print("Fantasy Hockey Mock Draft")
    print("=" * 60)
    print(f"\nStarting server on http://{API_HOST}:{API_PORT}")
    print("Press Ctrl+C to stop\n")
    start_background_scheduler()
    # One scheduler per process, so no reloader
    app.run(host=API_HOST, port=API_PORT, debug=API_DEBUG, use_reloader=False)
