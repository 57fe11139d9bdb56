"""
Accomplishment parser (certifications, honors, publications, projects...).
"""

from typing import Optional

from ..config import SCRAPING_CONSTANTS
from ..heuristics import normalize_lines, to_plain_text, looks_like_month_date
from ..models import Accomplishment, ParseInput
from .base import BaseParser


def _looks_like_description(text: str) -> bool:
    return len(text.split()) > 8 or len(text) > 80


class AccomplishmentParser(BaseParser[Accomplishment]):
    section_name = 'accomplishment'

    def parse(self, input: ParseInput) -> Optional[Accomplishment]:
        lines = normalize_lines(input.texts)
        title = lines[0] if lines else None
        if not title or len(title) > SCRAPING_CONSTANTS['MAX_TITLE_LENGTH']:
            return None

        issuer = None
        issued_date = None
        credential_id = None
        description = None

        for text in lines[1:]:
            if 'Issued by' in text:
                parts = [part.strip() for part in text.split('·')]
                issuer = parts[0].replace('Issued by', '').strip() or issuer
                if len(parts) > 1 and parts[1]:
                    issued_date = parts[1]
                continue

            if text.startswith('Issued '):
                issued_date = text[len('Issued '):].strip() or issued_date
                continue

            if text.startswith('Credential ID'):
                credential_id = text[len('Credential ID'):].strip() or credential_id
                continue

            if issuer is None:
                issuer = text
                continue

            if issued_date is None and looks_like_month_date(text):
                issued_date = text.split('·')[0].strip() or text
                continue

            if description is None and _looks_like_description(text):
                description = text

        credential_url = None
        for link in input.links:
            if 'credential' in link.url or 'verify' in link.url:
                credential_url = link.url
                break
        if credential_url is None and input.links:
            credential_url = input.links[0].url

        return Accomplishment(
            category=input.context.get('category', 'unknown'),
            title=title,
            issuer=issuer,
            issued_date=issued_date,
            credential_id=credential_id,
            credential_url=credential_url,
            description=description,
            plain_text=to_plain_text(lines),
        )

    def validate(self, item: Accomplishment) -> bool:
        return bool(item.title) and len(item.title) <= SCRAPING_CONSTANTS['MAX_TITLE_LENGTH']
