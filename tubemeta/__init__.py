"""
TubeMeta - YouTube metadata over HTTP

Thin REST façade around yt-dlp:
- Video details and comments
- Playlist listings (flat entries)
- Channel playlists and channel info
"""

__version__ = "1.0.0"
__author__ = "TubeMeta Contributors"
__license__ = "MIT"

from tubemeta.config import get_config, load_config

__all__ = [
    "__version__",
    "get_config",
    "load_config",
]
