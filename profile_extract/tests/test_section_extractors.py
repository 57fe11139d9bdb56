#!/usr/bin/env python3
"""
Section Extractor Tests
=======================

Inline vs detail-view lookup, interest tabs, contact blocks.

Run:
    python -m pytest profile_extract/tests/test_section_extractors.py
"""

import unittest

from profile_extract.models import SelectorVersion, SectionSelectorSet
from profile_extract.nodes import SoupNode, MappingNavigator
from profile_extract.registry import SelectorRegistry
from profile_extract.section_extractors.base import outermost
from profile_extract.section_extractors import (
    SectionConfig, ExperienceSectionExtractor, AccomplishmentSectionExtractor,
    InterestSectionExtractor, AboutSectionExtractor, TopCardSectionExtractor,
    ContactSectionExtractor,
)


def doc(html):
    return SoupNode.from_html(html)


INLINE_EXPERIENCE = """
<main>
  <section><h2>About</h2><p>Hi</p></section>
  <section>
    <h2>Experience</h2>
    <ul>
      <li class="pvs-list__paged-list-item"><span aria-hidden="true">Acme</span></li>
      <li class="pvs-list__paged-list-item"><span aria-hidden="true">Globex</span></li>
    </ul>
    {footer}
  </section>
</main>
"""

DETAIL_EXPERIENCE = """
<main><ul>
  <li class="pvs-list__paged-list-item"><span aria-hidden="true">Acme</span></li>
  <li class="pvs-list__paged-list-item"><span aria-hidden="true">Globex</span></li>
  <li class="pvs-list__paged-list-item"><span aria-hidden="true">Initech</span></li>
</ul></main>
"""

SHOW_ALL = '<a href="https://www.linkedin.com/in/jane/details/experience/">Show all 3 experiences</a>'


async def texts_of(nodes):
    return [(await n.text_content()).strip() for n in nodes]


class TestListSections(unittest.IsolatedAsyncioTestCase):

    async def test_inline_items(self):
        document = doc(INLINE_EXPERIENCE.format(footer=''))
        result = await ExperienceSectionExtractor().extract(SectionConfig('https://www.linkedin.com/in/jane', document))

        self.assertEqual(result.kind, 'list')
        self.assertEqual(await texts_of([t.node for t in result.items]), ['Acme', 'Globex'])

    async def test_truncated_inline_uses_detail_view(self):
        document = doc(INLINE_EXPERIENCE.format(footer=SHOW_ALL))
        navigator = MappingNavigator({'details/experience/': doc(DETAIL_EXPERIENCE)})

        result = await ExperienceSectionExtractor().extract(
            SectionConfig('https://www.linkedin.com/in/jane', document, navigator=navigator)
        )

        self.assertEqual(navigator.requested, ['details/experience'])
        self.assertEqual(await texts_of([t.node for t in result.items]), ['Acme', 'Globex', 'Initech'])

    async def test_truncated_without_navigator_keeps_inline(self):
        document = doc(INLINE_EXPERIENCE.format(footer=SHOW_ALL))
        result = await ExperienceSectionExtractor().extract(SectionConfig('', document))
        self.assertEqual(len(result.items), 2)

    async def test_unavailable_detail_view_falls_back_to_inline(self):
        document = doc(INLINE_EXPERIENCE.format(footer=SHOW_ALL))
        navigator = MappingNavigator({})
        result = await ExperienceSectionExtractor().extract(SectionConfig('', document, navigator=navigator))
        self.assertEqual(len(result.items), 2)

    async def test_document_is_already_the_detail_view(self):
        result = await ExperienceSectionExtractor().extract(SectionConfig('', doc(DETAIL_EXPERIENCE), detail_view=True))
        self.assertEqual(len(result.items), 3)

    async def test_overview_page_does_not_leak_other_sections(self):
        # No Experience card and no navigator: the education items must not be picked up
        document = doc('<main><section><h2>Education</h2><ul><li class="pvs-list__paged-list-item">MIT</li></ul></section></main>')
        result = await ExperienceSectionExtractor().extract(SectionConfig('', document))
        self.assertEqual(result.items, [])

    async def test_registry_selector_chain_order(self):
        registry = SelectorRegistry(SelectorVersion(
            version='custom',
            updated_at='',
            sections={'experience': SectionSelectorSet(item_selectors=['.missing', 'div.job'])},
        ))
        document = doc('<main><div class="job">A</div><div class="job">B</div></main>')
        result = await ExperienceSectionExtractor(registry=registry).extract(SectionConfig('', document, detail_view=True))
        self.assertEqual(await texts_of([t.node for t in result.items]), ['A', 'B'])

    async def test_accomplishment_context(self):
        document = doc("""
            <section><h2>Licenses &amp; certifications</h2><ul>
              <li class="pvs-list__paged-list-item"><span aria-hidden="true">AWS</span></li>
            </ul></section>
        """)
        extractor = AccomplishmentSectionExtractor('certifications', 'certification', heading='Licenses & certifications')
        result = await extractor.extract(SectionConfig('', document, section_context={'profile': 'jane'}))

        self.assertEqual(extractor.detail_path, 'details/certifications/')
        self.assertEqual(result.items[0].context, {'profile': 'jane', 'category': 'certification'})

    async def test_nothing_found(self):
        result = await ExperienceSectionExtractor().extract(SectionConfig('', doc('<main><p>empty</p></main>')))
        self.assertEqual(result.items, [])

    async def test_nested_list_entries_are_not_separate_items(self):
        document = doc("""
            <main><section><h2>Experience</h2><ul>
              <li><h3>Globex</h3><ul><li>Staff Engineer</li><li>Engineer</li></ul></li>
              <li><h3>Initech</h3></li>
            </ul></section></main>
        """)
        for detail_view in (False, True):
            with self.subTest(detail_view=detail_view):
                result = await ExperienceSectionExtractor().extract(SectionConfig('', document, detail_view=detail_view))
                headings = [(await (await t.node.query('h3')).text_content()) for t in result.items]
                self.assertEqual(headings, ['Globex', 'Initech'])

    async def test_outermost_keeps_document_order(self):
        document = doc('<ul><li id="a"><ul><li id="b">x</li></ul></li><li id="c">y</li></ul>')
        nodes = await document.query_all('li')
        kept = await outermost(nodes)
        self.assertEqual([await n.get_attribute('id') for n in kept], ['a', 'c'])
        self.assertTrue(await nodes[0].contains(nodes[1]))
        self.assertFalse(await nodes[1].contains(nodes[0]))
        self.assertFalse(await nodes[0].contains(nodes[0]))


class TestInterests(unittest.IsolatedAsyncioTestCase):

    async def test_tabs_map_to_categories(self):
        document = doc("""
            <section>
              <h2>Interests</h2>
              <div role="tablist">
                <button role="tab" aria-controls="p1">Companies</button>
                <button role="tab" aria-controls="p2">Groups</button>
              </div>
              <div role="tabpanel" id="p1"><ul>
                <li class="pvs-list__paged-list-item"><a href="https://www.linkedin.com/company/acme/"><span aria-hidden="true">Acme</span></a></li>
              </ul></div>
              <div role="tabpanel" id="p2"><ul>
                <li class="pvs-list__paged-list-item"><a href="https://www.linkedin.com/groups/42/"><span aria-hidden="true">Python Devs</span></a></li>
              </ul></div>
            </section>
        """)
        result = await InterestSectionExtractor().extract(SectionConfig('', document))

        self.assertEqual([t.context['category'] for t in result.items], ['company', 'group'])
        self.assertEqual(await texts_of([t.node for t in result.items]), ['Acme', 'Python Devs'])

    async def test_tabs_pair_with_panels_by_position(self):
        document = doc("""
            <section>
              <h2>Interests</h2>
              <div role="tablist">
                <button role="tab">Companies</button>
                <button role="tab">Groups</button>
              </div>
              <div role="tabpanel"><ul><li><span aria-hidden="true">Acme</span></li></ul></div>
              <div role="tabpanel"><ul><li><span aria-hidden="true">Pythonistas</span></li></ul></div>
            </section>
        """)
        result = await InterestSectionExtractor().extract(SectionConfig('', document))

        pairs = list(zip([t.context['category'] for t in result.items], await texts_of([t.node for t in result.items])))
        self.assertEqual(pairs, [('company', 'Acme'), ('group', 'Pythonistas')])

    async def test_tabs_pair_with_panels_by_labelledby(self):
        document = doc("""
            <section>
              <h2>Interests</h2>
              <button role="tab" id="t-groups">Groups</button>
              <button role="tab" id="t-companies">Companies</button>
              <div role="tabpanel" aria-labelledby="t-companies"><ul><li><span aria-hidden="true">Acme</span></li></ul></div>
              <div role="tabpanel" aria-labelledby="t-groups"><ul><li><span aria-hidden="true">Pythonistas</span></li></ul></div>
              <div role="tabpanel"><ul><li><span aria-hidden="true">Stray</span></li></ul></div>
            </section>
        """)
        result = await InterestSectionExtractor().extract(SectionConfig('', document))

        pairs = list(zip([t.context['category'] for t in result.items], await texts_of([t.node for t in result.items])))
        self.assertEqual(pairs, [('group', 'Pythonistas'), ('company', 'Acme')])

    async def test_shared_panel_belongs_to_selected_tab(self):
        document = doc("""
            <section>
              <h2>Interests</h2>
              <button role="tab" aria-selected="false">Companies</button>
              <button role="tab" aria-selected="true">Groups</button>
              <div role="tabpanel"><ul><li><span aria-hidden="true">Pythonistas</span></li></ul></div>
            </section>
        """)
        result = await InterestSectionExtractor().extract(SectionConfig('', document))

        self.assertEqual([t.context['category'] for t in result.items], ['group'])

    async def test_hidden_panel_skipped(self):
        document = doc("""
            <section>
              <h2>Interests</h2>
              <button role="tab" aria-controls="p1">Companies</button>
              <button role="tab" aria-controls="p2">Groups</button>
              <div role="tabpanel" id="p1"><ul><li><span aria-hidden="true">Acme</span></li></ul></div>
              <div role="tabpanel" id="p2" hidden><ul><li><span aria-hidden="true">Stale</span></li></ul></div>
            </section>
        """)
        result = await InterestSectionExtractor().extract(SectionConfig('', document))

        self.assertEqual(await texts_of([t.node for t in result.items]), ['Acme'])


class TestSingleSections(unittest.IsolatedAsyncioTestCase):

    async def test_about_block(self):
        document = doc("""
            <main><section><h2>About</h2>
              <div class="inline-show-more-text"><span aria-hidden="true">I build things.</span></div>
            </section></main>
        """)
        result = await AboutSectionExtractor().extract(SectionConfig('', document))
        self.assertEqual(result.kind, 'single')
        self.assertEqual((await result.item.node.text_content()).strip(), 'I build things.')

    async def test_about_missing(self):
        result = await AboutSectionExtractor().extract(SectionConfig('', doc('<main></main>')))
        self.assertIsNone(result.item)

    async def test_top_card(self):
        document = doc('<main><section class="artdeco-card"><h1>Jane Doe</h1></section><section class="artdeco-card">x</section></main>')
        result = await TopCardSectionExtractor().extract(SectionConfig('', document))
        self.assertIn('Jane Doe', await result.item.node.text_content())


class TestContactBlocks(unittest.IsolatedAsyncioTestCase):

    async def test_dialog_blocks(self):
        document = doc("""
            <div role="dialog">
              <section class="pv-contact-info__contact-type">
                <h3>Email</h3>
                <a href="mailto:a@b.com">a@b.com</a>
                <span>(Work)</span>
              </section>
              <section class="pv-contact-info__contact-type">
                <h3>Phone</h3>
                <span>+1 555 0100</span>
              </section>
            </div>
        """)
        result = await ContactSectionExtractor().extract(SectionConfig('', document))

        self.assertEqual(result.kind, 'raw')
        email, phone = result.sections
        self.assertEqual(email.heading, 'Email')
        self.assertEqual(email.labels, ['Work'])
        self.assertEqual(email.anchors[0].href, 'mailto:a@b.com')
        self.assertEqual(phone.text, 'Phone +1 555 0100')

    async def test_heading_parent_fallback(self):
        document = doc('<main><div><h3>Website</h3><a href="https://example.com">example.com</a></div></main>')
        sections = await ContactSectionExtractor().extract_raw_sections(document)
        self.assertEqual(len(sections), 1)
        self.assertEqual(sections[0].heading, 'Website')
        self.assertEqual(sections[0].anchors[0].href, 'https://example.com')

    async def test_detail_overlay(self):
        overlay = doc('<div role="dialog"><section class="pv-contact-info__contact-type"><h3>Email</h3><a href="mailto:x@y.com">x</a></section></div>')
        navigator = MappingNavigator({'overlay/contact-info/': overlay})
        result = await ContactSectionExtractor().extract(SectionConfig('', doc('<main></main>'), navigator=navigator))
        self.assertEqual(len(result.sections), 1)


if __name__ == "__main__":
    unittest.main()
