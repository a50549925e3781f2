"""
Mazerun - Three-Floor Maze Board Game Engine

A deterministic, seedable simulator for a dice-driven race through a
three-floor maze. The engine provides:
- Grid geometry, stairs, poles and walls
- Cell effects and the recovery area
- Step-by-step movement with capture and flag detection
- Turn and round scheduling
"""

__version__ = "0.1.0"
