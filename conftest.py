import os
import sys

# Ensure the backend packages (apps, qkart) are importable when running `pytest` from repo root
BASE_DIR = os.path.dirname(__file__)
BACKEND_DIR = os.path.join(BASE_DIR, "backend")
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "qkart.settings")
os.environ.setdefault("DJANGO_SECRET_KEY", "qkart-test-secret-key")
