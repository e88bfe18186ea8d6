"""FastAPI application entry point."""

from aerotrack.core.registrar import create_app

app = create_app()
