"""
RSS Translator

Fetches RSS/Atom feeds, translates their text through a Google Apps Script
endpoint, and re-serializes the result as RSS 2.0.
"""

__version__ = "1.0.0"
