# Recipe Site Test Suite
"""
Test suite for Recipe Site.

Unit tests run services and repositories against an in-memory database.
Integration tests drive the FastAPI app through TestClient.
Browser scenarios in e2e/ only run against a live server.
"""
