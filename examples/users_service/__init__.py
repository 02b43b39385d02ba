"""Example user management service documented with openapi-autodoc."""
