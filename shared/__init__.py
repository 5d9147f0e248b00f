"""
Shared infrastructure: configuration, logging, errors, persistence clients and models.
"""
