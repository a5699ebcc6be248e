"""Prepository - keep behavioral interview stories in STAR format.

A small REST backend with account signup/login and per-user CRUD over
stories (Situation, Action, Result, plus category tags).

Quick Start:
    uvicorn prepository.api.main:app --port 4000
"""

__version__ = "0.1.0"
