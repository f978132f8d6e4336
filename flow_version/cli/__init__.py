"""
CLI module for flow-version
"""

from .main import main

__all__ = ['main']
