"""Application configuration and constants."""
import os
from pathlib import Path

# Directory paths
BASE_DIR = Path(__file__).resolve().parent.parent
PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

# Database file (tests point this at a temporary path)
DATABASE_PATH = Path(os.environ.get("RECIPE_DATABASE_PATH", str(BASE_DIR / "recipes.db")))
DB_MAX_CONNECTIONS = int(os.environ.get("RECIPE_DB_MAX_CONNECTIONS", "10"))

# Base URL configuration (for running under a subpath like /recipes)
BASE_URL = os.environ.get("RECIPE_BASE_URL", "").strip("/")
ROOT_PATH = f"/{BASE_URL}" if BASE_URL else ""

# Logging
LOG_LEVEL = os.environ.get("RECIPE_LOG_LEVEL", "INFO").upper()

# Session configuration
SESSION_COOKIE = "recipe_session"
SESSION_HOURS = int(os.environ.get("RECIPE_SESSION_HOURS", "12"))
REMEMBER_ME_DAYS = int(os.environ.get("RECIPE_REMEMBER_ME_DAYS", "7"))

# Paths that don't require authentication (without BASE_URL prefix)
LOGIN_PATH = "/Login"
PUBLIC_PATHS = {LOGIN_PATH, "/static", "/favicon.ico"}

# CSRF configuration
CSRF_TOKEN_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"
CSRF_COOKIE_NAME = "recipe_csrf"

# Recipe form choices
RECIPE_CATEGORIES = ("Breakfast", "Lunch", "Dinner", "Dessert", "Snack")
RECIPE_DIFFICULTIES = ("Easy", "Medium", "Hard")
FORM_INGREDIENT_ROWS = 3
FORM_INSTRUCTION_ROWS = 3

# User search
USER_SEARCH_MIN_LENGTH = 2
USER_SEARCH_LIMIT = 10

# Passwords
MIN_PASSWORD_LENGTH = 4
