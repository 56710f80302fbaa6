"""Blogging API - users, bearer-token auth and blog posts on FastAPI."""
