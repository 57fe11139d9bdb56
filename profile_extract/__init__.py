"""
Profile Extraction Module

Extracts structured profile records (experience, education, accomplishments,
contacts, ...) from documents whose markup drifts over time.
Tries several text extraction strategies per item and keeps the most
trustworthy one, degrading to partial data instead of failing.
"""

__version__ = "0.1.0"
