"""
Backend package for the Perdia operations app.

This package provides the FastAPI serverless functions plus the REST,
management API and migration helpers the admin scripts build on. Storage,
auth and query execution stay with the hosted backend-as-a-service.
"""
