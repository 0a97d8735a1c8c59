import sys
import os

# Add your project directory to the sys.path
project_home = os.environ.get('BACKOFFICE_HOME', os.path.dirname(os.path.abspath(__file__)))
if project_home not in sys.path:
    sys.path.insert(0, project_home)

# Import your Flask app
from app import app as application, init_db

# Create tables and settings rows on first start
init_db()
