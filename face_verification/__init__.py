"""Face verification service: decides whether a reference photo and a selfie show the same person"""

__version__ = "1.0.0"
