"""Core domain package for linkscope.

Core contains link matching, caching, and citation assembly without any
discord.py specific code, keeping the expansion logic portable.
"""

__version__ = "0.1.0"
