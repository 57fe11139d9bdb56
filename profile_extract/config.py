#!/usr/bin/env python3
"""
Configuration Management
=======================

Centralized configuration and scraping constants for profile extraction.
When document behavior changes or extraction needs adjustment, update values here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file (cwd first, then package dir)
load_dotenv()
script_dir = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(script_dir, '.env'))


class Config:
    """Application configuration"""

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Selector registry persistence
    SELECTOR_FILE = os.getenv('SELECTOR_FILE', 'selectors.json')

    # Pipeline behaviour
    CAPTURE_HTML_ON_FAILURE = os.getenv('CAPTURE_HTML_ON_FAILURE', 'True').lower() == 'true'

    # Browser
    HEADLESS = os.getenv('HEADLESS', 'True').lower() == 'true'
    PAGE_WAIT_MS = int(os.getenv('PAGE_WAIT_MS', 2000))

    # LLM Configuration (self-heal)
    ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY') or os.getenv('CLAUDE_API_KEY')
    CLAUDE_MODEL = os.getenv('CLAUDE_MODEL', 'claude-sonnet-4-20250514')


SCRAPING_CONSTANTS = {
    # Text length thresholds for field detection
    'MIN_DESCRIPTION_WORD_COUNT': 6,
    'MIN_DESCRIPTION_LENGTH': 100,
    'MAX_LOCATION_LENGTH': 100,
    'MAX_LOCATION_WORD_COUNT': 6,

    # Text filtering thresholds
    'MAX_FALLBACK_TEXT_LENGTH': 500,
    'MAX_TITLE_LENGTH': 200,
    'MAX_PATENT_TITLE_LENGTH': 300,

    # Snippet sizes handed to self-heal
    'MAX_CAPTURED_HTML': 8000,
    'MAX_SELF_HEAL_HTML': 4000,
}

DATE_PATTERNS = {
    # Keywords indicating current/ongoing employment (normalized to "Present")
    'CURRENT_KEYWORDS': ('Present', 'Current', 'Now', 'Ongoing'),
    'PRESENT': 'Present',

    # Separators in date strings
    'DURATION_SEPARATOR': '·',
    'DATE_RANGE_SEPARATOR': ' - ',

    # Regex patterns for date components
    'DURATION_REGEX': r'\d+\s+(yr|yrs|mo|mos)\b',
    'YEAR_REGEX': r'\d{4}',
}

# Host that marks a link as internal to the profile site
PROFILE_HOST = 'linkedin.com'
