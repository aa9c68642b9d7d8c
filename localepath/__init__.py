"""Locale and subfolder resolution middlewares for FastAPI applications."""
