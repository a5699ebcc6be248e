"""FastAPI application and REST API endpoints.

This module contains:
- Main FastAPI application configuration
- The bearer-token auth gate
- Auth and story endpoints
"""
