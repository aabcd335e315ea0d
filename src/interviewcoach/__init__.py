"""
Interview Coach: mock interview sessions with AI and heuristic scoring.
"""

__version__ = "1.0.0"
