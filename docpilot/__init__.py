"""DocPilot: asset manager dashboard backend with document drafting and copilot chat."""

__version__ = "1.0.0"
