"""
Pydantic schemas for form input and view data.

Form posts are parsed into these models before reaching the services, and
datastore rows are mapped into them before reaching the templates.
"""
