"""
distwordcount - parallel counting of dictionary words over a text corpus.
"""

__version__ = "0.1.0"
