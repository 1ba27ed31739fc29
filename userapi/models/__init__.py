# userapi/models/__init__.py

"""
This __init__.py file ensures that models and database components are available
for import throughout the application, so Base.metadata knows every table
before create_tables() runs.
"""

from userapi.database import Base

# Models from user.py
from .user import User, new_document_id
