"""
Marc - command-line TODO/annotation manager.
"""

__version__ = "0.2.0"
