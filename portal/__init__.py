"""
Support Portal - file manager and support ticket desk
"""

__version__ = "1.0.0"
