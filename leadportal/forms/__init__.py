# leadportal/forms/__init__.py
