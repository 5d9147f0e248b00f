"""
API gateway for the video generation control endpoints.
"""
