"""Frame timing, geometry and collision, input state, level loading and post-effect settings for games."""

__version__ = "0.1.0"