"""
Media store.

Source image and clip asset fetch, plus durable clip upload.
"""

from modules.media_store.client import MediaStore, get_video_path

__all__ = ["MediaStore", "get_video_path"]
