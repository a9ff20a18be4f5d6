"""
Browser scenarios for login and recipe creation.

Run against a live server:
    python manage_users.py add e2e e2e@example.com E2ePassw0rd!
    uvicorn recipe_site.main:app --port 8000
    RECIPE_E2E_BASE_URL=http://localhost:8000 pytest tests/e2e --headed --slowmo 300

Step definitions live in conftest.py.
"""
import pytest
from pytest_bdd import scenarios

pytestmark = pytest.mark.e2e

scenarios("features")
