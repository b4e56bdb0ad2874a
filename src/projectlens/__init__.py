"""
ProjectLens Core - project structure, technology and convention profiler.
"""

__version__ = "0.1.0"
