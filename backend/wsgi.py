# WSGI entry point
# Point gunicorn/mod_wsgi/PythonAnywhere at `wsgi:application`

import sys
import os

# Add project to path
project_path = os.path.dirname(os.path.abspath(__file__))
if project_path not in sys.path:
    sys.path.insert(0, project_path)

os.environ.setdefault('FLASK_ENV', 'production')

# Load environment variables from .env file if present
from dotenv import load_dotenv
env_path = os.path.join(project_path, '.env')
if os.path.exists(env_path):
    load_dotenv(env_path)

# Settings are read at import time, so import after the environment is ready
from docsign.config import Settings
from docsign.main import create_app

application = create_app(Settings())
