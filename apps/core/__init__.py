"""Core app package.

Cross-cutting pieces shared by the domain apps: the API error taxonomy,
the JSON error envelope and uploaded image storage.
"""
