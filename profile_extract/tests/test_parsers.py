#!/usr/bin/env python3
"""
Parser Tests
============

Record parsing and validation from ParseInput values.

Run:
    python -m pytest profile_extract/tests/test_parsers.py
"""

import unittest

from profile_extract.models import ParseInput, ExtractedLink, RawSection, RawAnchor, Experience, Position
from profile_extract.parsers import (
    ExperienceParser, EducationParser, AccomplishmentParser, PatentParser,
    InterestParser, TopCardParser, AboutParser, ContactParser, supports_raw,
)
from profile_extract.parsers.patent import looks_like_patent_metadata, parse_patent_subtitle


class TestExperienceParser(unittest.TestCase):

    def setUp(self):
        self.parser = ExperienceParser()

    def test_single_position(self):
        record = self.parser.parse(ParseInput(texts=[
            "Acme Corp",
            "Senior Engineer · Full-time",
            "Jan 2020 - Present · 2 yrs 3 mos",
            "Remote",
            "Built distributed systems for large scale payment processing",
        ]))

        self.assertTrue(self.parser.validate(record))
        self.assertEqual(record.company, "Senior Engineer")
        position = record.positions[0]
        self.assertEqual(position.title, "Acme Corp")
        self.assertEqual(position.employment_type, "Full-time")
        self.assertEqual(position.from_date, "Jan 2020")
        self.assertEqual(position.to_date, "Present")
        self.assertEqual(position.duration, "2 yrs 3 mos")
        self.assertEqual(position.location, "Remote")
        self.assertTrue(position.description.startswith("Built"))

    def test_date_line_second_means_no_company(self):
        record = self.parser.parse(ParseInput(
            texts=["Consultant", "2018 - 2019 · 1 yr"],
            links=[ExtractedLink(url="https://www.linkedin.com/company/initech/", text="Initech")],
        ))
        self.assertEqual(record.company, "Initech")
        self.assertEqual(record.company_url, "https://www.linkedin.com/company/initech/")
        self.assertEqual(record.positions[0].from_date, "2018")
        self.assertEqual(record.positions[0].to_date, "2019")

    def test_sub_items_make_one_employer_with_many_positions(self):
        sub_items = [
            ParseInput(texts=["Staff Engineer", "Full-time", "Jan 2022 - Present · 1 yr"]),
            ParseInput(texts=["Senior Engineer", "Jan 2021 - Dec 2021 · 1 yr", "Berlin, Germany"]),
            ParseInput(texts=["Engineer", "Nov 2020 - Dec 2020 · 2 mos"]),
        ]
        record = self.parser.parse(ParseInput(texts=["Globex", "3 yrs 2 mos"], sub_items=sub_items))

        self.assertEqual(record.company, "Globex")
        self.assertEqual([p.title for p in record.positions], ["Staff Engineer", "Senior Engineer", "Engineer"])
        self.assertEqual(record.positions[0].employment_type, "Full-time")
        self.assertEqual(record.positions[0].to_date, "Present")
        self.assertIsNone(record.positions[1].employment_type)
        self.assertEqual(record.positions[1].location, "Berlin, Germany")
        self.assertEqual(record.positions[2].duration, "2 mos")

    def test_validate(self):
        self.assertFalse(self.parser.validate(Experience(company="Acme", positions=[])))
        long_title = Position(title="x" * 201)
        self.assertFalse(self.parser.validate(Experience(company="Acme", positions=[long_title])))
        self.assertTrue(self.parser.validate(Experience(company=None, positions=[Position(title="CTO")])))

    def test_empty(self):
        self.assertIsNone(self.parser.parse(ParseInput(texts=[" "])))


class TestEducationParser(unittest.TestCase):

    def setUp(self):
        self.parser = EducationParser()

    def test_full(self):
        record = self.parser.parse(ParseInput(
            texts=["MIT", "BSc, Computer Science", "2012 - 2016", "Thesis on compilers"],
            links=[ExtractedLink(url="https://www.linkedin.com/school/mit/")],
        ))
        self.assertEqual(record.institution_name, "MIT")
        self.assertEqual(record.degree, "BSc, Computer Science")
        self.assertEqual((record.from_date, record.to_date), ("2012", "2016"))
        self.assertEqual(record.description, "Thesis on compilers")
        self.assertEqual(record.url, "https://www.linkedin.com/school/mit/")

    def test_two_lines_date_or_degree(self):
        dated = self.parser.parse(ParseInput(texts=["Stanford", "2020"]))
        self.assertIsNone(dated.degree)
        self.assertEqual(dated.from_date, "2020")

        degree = self.parser.parse(ParseInput(texts=["Stanford", "MBA"]))
        self.assertEqual(degree.degree, "MBA")
        self.assertIsNone(degree.from_date)

    def test_validate_length(self):
        record = self.parser.parse(ParseInput(texts=["x" * 201]))
        self.assertFalse(self.parser.validate(record))


class TestAccomplishmentParser(unittest.TestCase):

    def test_certification(self):
        record = AccomplishmentParser().parse(ParseInput(
            texts=["AWS Certified Architect", "Amazon Web Services", "Issued Jan 2023", "Credential ID ABC-123"],
            links=[
                ExtractedLink(url="https://www.linkedin.com/company/amazon/"),
                ExtractedLink(url="https://aws.amazon.com/verify/123", is_external=True),
            ],
            context={'category': 'certification'},
        ))
        self.assertEqual(record.category, "certification")
        self.assertEqual(record.issuer, "Amazon Web Services")
        self.assertEqual(record.issued_date, "Jan 2023")
        self.assertEqual(record.credential_id, "ABC-123")
        self.assertEqual(record.credential_url, "https://aws.amazon.com/verify/123")

    def test_issued_by_line(self):
        record = AccomplishmentParser().parse(ParseInput(texts=["Dean's List", "Issued by University · Feb 2021"]))
        self.assertEqual(record.issuer, "University")
        self.assertEqual(record.issued_date, "Feb 2021")
        self.assertEqual(record.category, "unknown")

    def test_description(self):
        record = AccomplishmentParser().parse(ParseInput(texts=[
            "Open source parser", "Self", "Mar 2020",
            "A streaming parser for large documents written over several weekends",
        ]))
        self.assertEqual(record.issued_date, "Mar 2020")
        self.assertTrue(record.description.startswith("A streaming parser"))


class TestPatentParser(unittest.TestCase):

    def test_metadata(self):
        self.assertTrue(looks_like_patent_metadata("US 10,123,456 · Issued Mar 3, 2020"))
        self.assertTrue(looks_like_patent_metadata("Issued Mar 3, 2020"))
        self.assertFalse(looks_like_patent_metadata("A method for caching"))

        meta = parse_patent_subtitle("US 10,123,456 · Issued Mar 3, 2020")
        self.assertEqual(meta, {'issuer': 'US', 'number': '10,123,456', 'issued_date': 'Mar 3, 2020'})

    def test_parse(self):
        record = PatentParser().parse(ParseInput(
            texts=["Method for caching", "US 10,123,456 · Issued Mar 3, 2020", "A method for caching results."],
            links=[ExtractedLink(
                url="https://www.linkedin.com/redir/redirect?url=https%3A%2F%2Fpatents.google.com%2Fpatent%2FUS10123456",
                text="Show patent",
            )],
        ))
        self.assertEqual(record.title, "Method for caching")
        self.assertEqual(record.number, "10,123,456")
        self.assertEqual(record.url, "https://patents.google.com/patent/US10123456")
        self.assertEqual(record.description, "A method for caching results.")

    def test_placeholders_skipped(self):
        self.assertIsNone(PatentParser().parse(ParseInput(texts=["Patents"])))
        self.assertIsNone(PatentParser().parse(ParseInput(texts=["Patents", "Patents adds will appear here"])))


class TestSmallParsers(unittest.TestCase):

    def test_interest_requires_link(self):
        parser = InterestParser()
        self.assertIsNone(parser.parse(ParseInput(texts=["Acme"])))

        record = parser.parse(ParseInput(
            texts=["Acme", "1,000 followers"],
            links=[ExtractedLink(url="https://www.linkedin.com/company/acme/")],
            context={'category': 'company'},
        ))
        self.assertEqual((record.name, record.category), ("Acme", "company"))

    def test_top_card(self):
        record = TopCardParser().parse(ParseInput(texts=["Jane Doe", "Engineer at Acme", "London, England Contact info"]))
        self.assertEqual(record.name, "Jane Doe")
        self.assertEqual(record.headline, "Engineer at Acme")
        self.assertEqual(record.origin, "London, England")

    def test_about(self):
        record = AboutParser().parse(ParseInput(texts=["About", "I build things."]))
        self.assertEqual(record.text, "I build things.")
        self.assertIsNone(AboutParser().parse(ParseInput(texts=["About"])))


class TestContactParser(unittest.TestCase):

    def setUp(self):
        self.parser = ContactParser()

    def test_supports_raw(self):
        self.assertTrue(supports_raw(self.parser))
        self.assertFalse(supports_raw(AboutParser()))

    def test_email_from_mailto(self):
        contacts = self.parser.parse_raw([
            RawSection(heading="Email", anchors=[RawAnchor(href="mailto:a@b.com", text="a@b.com")]),
        ])
        self.assertEqual(len(contacts), 1)
        self.assertEqual((contacts[0].type, contacts[0].value), ("email", "a@b.com"))

    def test_duplicates_first_label_wins(self):
        contacts = self.parser.parse_raw([
            RawSection(heading="Email", labels=["Work"], anchors=[RawAnchor(href="mailto:a@b.com")]),
            RawSection(heading="Email", labels=["Personal"], anchors=[RawAnchor(href="mailto:a@b.com")]),
        ])
        self.assertEqual(len(contacts), 1)
        self.assertEqual(contacts[0].label, "Work")

    def test_label_only_types_use_text(self):
        contacts = self.parser.parse_raw([
            RawSection(heading="Phone", text="Phone +1 555 0100"),
            RawSection(heading="Birthday", text="Birthday: May 4"),
        ])
        self.assertEqual([(c.type, c.value) for c in contacts], [("phone", "+1 555 0100"), ("birthday", "May 4")])

    def test_website_and_unknown_heading(self):
        contacts = self.parser.parse_raw([
            RawSection(heading="Website", anchors=[RawAnchor(href=None, text="example.com")]),
            RawSection(heading="Connected", text="Connected 2 years ago"),
        ])
        self.assertEqual([(c.type, c.value) for c in contacts], [("website", "example.com")])

    def test_degraded_parse(self):
        contact = self.parser.parse(ParseInput(
            texts=["Your Profile", "linkedin.com/in/jane"],
            links=[ExtractedLink(url="https://www.linkedin.com/in/jane", text="linkedin.com/in/jane")],
        ))
        self.assertEqual((contact.type, contact.value), ("linkedin", "https://www.linkedin.com/in/jane"))


if __name__ == "__main__":
    unittest.main()
