"""HTTP API for the transcoding providers."""
