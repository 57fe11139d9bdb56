"""
Patent parser.

Metadata rows look like "US 10,123,456 · Issued Mar 3, 2020" or
"Issued Mar 3, 2020"; everything else after the title is description.
"""

import re
from typing import Optional, Dict

from ..config import SCRAPING_CONSTANTS
from ..heuristics import normalize_lines, to_plain_text, decode_redirect_url
from ..models import Patent, ParseInput
from .base import BaseParser

_ID_LIKE = re.compile(r'^[A-Z]{2}\s+[A-Z0-9,\-]+(?:\s+[A-Z0-9,\-]+)*$')
_ISSUER_NUMBER = re.compile(r'^([A-Z]{2})\s+(.+)$')

PLACEHOLDER_MARKERS = ('adds will appear here',)


def looks_like_patent_metadata(line: str) -> bool:
    normalized = line.strip()
    if not normalized:
        return False
    if re.search(r'\bissued\b', normalized, re.IGNORECASE):
        return True
    id_part = normalized.split('·')[0].strip()
    return bool(_ID_LIKE.match(id_part)) and bool(re.search(r'\d', id_part))


def _strip_issued(text: str) -> str:
    return re.sub(r'issued', '', text, count=1, flags=re.IGNORECASE).strip()


def parse_patent_subtitle(subtitle: str) -> Dict[str, Optional[str]]:
    issuer = None
    number = None
    issued_date = None

    parts = [part.strip() for part in subtitle.split('·')]
    id_part = parts[0] if parts else ''
    if id_part:
        if id_part.lower().startswith('issued'):
            issued_date = _strip_issued(id_part) or None
        else:
            match = _ISSUER_NUMBER.match(id_part)
            if match:
                issuer, number = match.group(1), match.group(2)
            else:
                number = id_part

    if len(parts) > 1 and parts[1]:
        date_part = parts[1]
        if date_part.lower().startswith('issued'):
            issued_date = _strip_issued(date_part) or issued_date
        else:
            issued_date = date_part

    return {'issuer': issuer, 'number': number, 'issued_date': issued_date}


class PatentParser(BaseParser[Patent]):
    section_name = 'patent'

    def parse(self, input: ParseInput) -> Optional[Patent]:
        lines = normalize_lines(input.texts)
        if not lines:
            return None
        if len(lines) == 1 and lines[0] == 'Patents':
            return None
        if any(marker in line for line in lines for marker in PLACEHOLDER_MARKERS):
            return None

        title = lines[0]
        metadata_line = next((line for line in lines[1:] if looks_like_patent_metadata(line)), None)
        meta = parse_patent_subtitle(metadata_line) if metadata_line else {}

        description_lines = [
            line for line in lines[1:]
            if line != metadata_line and not looks_like_patent_metadata(line)
        ]

        url = None
        for link in input.links:
            if 'show patent' in link.text.lower() or 'patent' in link.url:
                url = decode_redirect_url(link.url)
                break

        return Patent(
            title=title,
            issuer=meta.get('issuer'),
            number=meta.get('number'),
            issued_date=meta.get('issued_date'),
            url=url,
            description='\n'.join(description_lines) or None,
            plain_text=to_plain_text(lines),
        )

    def validate(self, item: Patent) -> bool:
        return bool(item.title) and len(item.title) <= SCRAPING_CONSTANTS['MAX_PATENT_TITLE_LENGTH']
