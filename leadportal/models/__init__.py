# leadportal/models/__init__.py
