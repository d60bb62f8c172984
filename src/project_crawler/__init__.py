"""
Project Crawler

Discovers the repositories of a GitHub organization or user and reads
pipeline descriptors from them.
"""

__version__ = "0.1.0"
__author__ = "Project Crawler Team"
__description__ = "GitHub repository discovery for pipeline generation"
