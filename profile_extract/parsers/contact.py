"""
Contact parser.

Works on raw blocks: the heading decides the contact type, the value comes
from the first usable anchor or, for label-only types, from the block text
with the heading stripped.
"""

import re
from typing import Optional, List

from ..heuristics import map_contact_heading
from ..models import Contact, ParseInput, RawSection, RawAnchor
from .base import RawParser

# Types whose value is plain text, not a link
LABEL_ONLY_TYPES = {'birthday', 'phone', 'address'}


def normalize_value(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    normalized = ' '.join(value.split())
    return normalized or None


def extract_plain_value(text: str, heading: str) -> Optional[str]:
    cleaned = normalize_value(text)
    if not cleaned:
        return None
    cleaned = re.sub(rf'^{re.escape(heading)}\s*', '', cleaned, flags=re.IGNORECASE).strip()
    cleaned = re.sub(r'^:\s*', '', cleaned).strip()
    return cleaned or None


def dedupe_contacts(contacts: List[Contact]) -> List[Contact]:
    """Drop exact (type, value) repeats; the first one (and its label) wins."""
    seen = set()
    deduped = []
    for contact in contacts:
        key = (contact.type, contact.value)
        if key in seen:
            continue
        seen.add(key)
        deduped.append(contact)
    return deduped


class ContactParser(RawParser[Contact]):
    section_name = 'contact'

    def parse(self, input: ParseInput) -> Optional[Contact]:
        """Degraded path: one synthesized block (heading first)."""
        if not input.texts:
            return None
        section = RawSection(
            heading=input.texts[0],
            text=' '.join(input.texts),
            anchors=[RawAnchor(href=link.url, text=link.text) for link in input.links],
        )
        contacts = self.parse_raw([section])
        return contacts[0] if contacts else None

    def parse_raw(self, sections: List[RawSection]) -> List[Contact]:
        contacts: List[Contact] = []

        for section in sections:
            contacts.extend(self._parse_block(section))

        return dedupe_contacts(contacts)

    def _parse_block(self, section: RawSection) -> List[Contact]:
        contact_type = map_contact_heading(section.heading)
        if not contact_type:
            return []

        label = section.labels[0] if section.labels else None

        if contact_type in LABEL_ONLY_TYPES:
            value = extract_plain_value(section.text, section.heading)
            return [Contact(type=contact_type, value=value)] if value else []

        found = []
        for anchor in section.anchors:
            href = normalize_value(anchor.href)
            text = normalize_value(anchor.text)
            if not href and not text:
                continue

            if contact_type == 'email':
                value = href[len('mailto:'):] if href and href.startswith('mailto:') else text
            elif contact_type == 'linkedin':
                value = href
            else:
                value = href or text

            if value:
                found.append(Contact(type=contact_type, value=value, label=label))

        return found

    def validate(self, item: Contact) -> bool:
        return bool(item.type) and bool(item.value)
