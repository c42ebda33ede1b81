"""Web package for the forest plot generator.

This package contains the FastAPI application serving the upload
dashboard and the JSON API the page uses to fetch render payloads.

To start the web server from the CLI use:
    fpg serve --port 8000 --reload
"""
