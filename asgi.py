"""
ASGI entry point.

Run with:
    uvicorn asgi:app

or `python main.py` to pick up HOST/PORT from the settings.
"""

from app import create_app

app = create_app()
