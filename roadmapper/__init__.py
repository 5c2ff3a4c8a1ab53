"""
Roadmapper - compare versions of a development roadmap.
"""

__version__ = "0.1.0"
