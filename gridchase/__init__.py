"""Grid chase game engine: terrain, movement, adversary AI, scoring, fixed-step loop."""

__version__ = "0.1.0"
