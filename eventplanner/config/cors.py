"""CORS configuration for the FastAPI application."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT

# CORS Origins configuration
ALLOWED_ORIGINS = {
    False: ["http://localhost:5173", "http://localhost:8080"],  # Development
    True: [                                                      # Production - restricted
        origin.strip().rstrip("/")
        for origin in os.environ.get('CORS_ORIGINS', '').split(",")
        if origin.strip()
    ]
}

# CORS Methods configuration
ALLOWED_METHODS = [
    "GET",      # Listing events, auth status
    "POST",     # Creating events, login/logout
    "PUT",      # Updating events
    "DELETE",   # Deleting events and images
    "OPTIONS"   # Required for CORS preflight
]

# CORS Headers configuration
ALLOWED_HEADERS = [
    "Content-Type",   # For request bodies
    "Accept",         # For content negotiation
]

# The session cookie has to travel with cross-origin requests
CORS_CONFIG = {
    "allow_origins": ALLOWED_ORIGINS[IS_PRODUCTION_ENVIRONMENT],
    "allow_credentials": True,
    "allow_methods": ALLOWED_METHODS,
    "allow_headers": ALLOWED_HEADERS,
    "expose_headers": [],
    "max_age": 3600,
}
