"""Video Transcoding API: backend-agnostic transcoding job dispatch."""

__version__ = "0.1.0"
