"""
Read To Watch - Reading Challenge Engine

Gates video playback until a child reads a short sentence aloud. Each spoken
word is verified against the target sentence using live speech recognition,
with fuzzy matching tolerant of young readers.
"""

__version__ = "0.4.4"
__author__ = "RTW Team"
