"""
Section runners.

One call per profile section: wires the section extractor, the text
extractors, the parser and the section's confidence threshold, runs the
pipeline and returns plain records. Runners log a one-line summary and never
raise; an unusable section comes back empty.

    document = SoupNode.from_html(html)
    experiences = await get_experiences(document, base_url=profile_url)
"""

from dataclasses import dataclass
from typing import Optional, List, Callable, Dict, Hashable, Tuple

from .config import Config
from .exceptions import ProfileExtractError
from .models import (
    Experience, Education, Accomplishment, Patent, Interest, TopCard, Contact,
    PipelineResult, SelectorVersion,
)
from .nodes import Node, Navigator
from .parsers import (
    BaseParser, ExperienceParser, EducationParser, AccomplishmentParser, PatentParser,
    InterestParser, TopCardParser, AboutParser, ContactParser,
)
from .pipeline import ExtractionPipeline, deduplicate_items
from .registry import SelectorRegistry, selector_registry
from .section_extractors import (
    BaseSectionExtractor, SectionConfig, ExperienceSectionExtractor, EducationSectionExtractor,
    AccomplishmentSectionExtractor, PatentSectionExtractor, InterestSectionExtractor,
    AboutSectionExtractor, TopCardSectionExtractor, ContactSectionExtractor,
)
from .self_heal import SelfHealProvider, attempt_self_heal
from .text_extractors import default_text_extractors
from .logger import get_logger

log = get_logger('sections')


@dataclass
class SectionSetup:
    extractor: Callable[..., BaseSectionExtractor]
    parser: Callable[[], BaseParser]
    threshold: float
    key_fn: Optional[Callable[[object], Hashable]] = None


def experience_key(exp: Experience) -> Hashable:
    return (exp.company, exp.positions[0].title if exp.positions else None)


SECTION_SETUPS: Dict[str, SectionSetup] = {
    'experience': SectionSetup(ExperienceSectionExtractor, ExperienceParser, 0.3, experience_key),
    'education': SectionSetup(
        EducationSectionExtractor, EducationParser, 0.3,
        lambda edu: (edu.institution_name, edu.degree, edu.from_date),
    ),
    'accomplishment': SectionSetup(
        AccomplishmentSectionExtractor, AccomplishmentParser, 0.25,
        lambda acc: (acc.category, acc.title),
    ),
    'patent': SectionSetup(
        PatentSectionExtractor, PatentParser, 0.25,
        lambda patent: (patent.title, patent.number or ''),
    ),
    'interest': SectionSetup(
        InterestSectionExtractor, InterestParser, 0.25,
        lambda interest: (interest.category, interest.name),
    ),
    'about': SectionSetup(AboutSectionExtractor, AboutParser, 0.25),
    'top-card': SectionSetup(TopCardSectionExtractor, TopCardParser, 0.3),
    # Contact blocks are pre-segmented and deduped by the parser itself
    'contact': SectionSetup(ContactSectionExtractor, ContactParser, 0.0),
}

# (detail url path, category, inline heading)
ACCOMPLISHMENT_SECTIONS: List[Tuple[str, str, str]] = [
    ('certifications', 'certification', 'Licenses & certifications'),
    ('honors', 'honor', 'Honors & awards'),
    ('publications', 'publication', 'Publications'),
    ('courses', 'course', 'Courses'),
    ('projects', 'project', 'Projects'),
    ('languages', 'language', 'Languages'),
    ('organizations', 'organization', 'Organizations'),
]


def build_pipeline(
    section: str,
    registry: Optional[SelectorRegistry] = None,
    capture_html_on_failure: Optional[bool] = None,
    **extractor_kwargs,
) -> ExtractionPipeline:
    """Pipeline for a named section with its default threshold and dedup key."""
    setup = SECTION_SETUPS.get(section)
    if setup is None:
        raise ProfileExtractError(f"Unknown section '{section}' (known: {', '.join(SECTION_SETUPS)})")

    if capture_html_on_failure is None:
        capture_html_on_failure = Config.CAPTURE_HTML_ON_FAILURE

    return ExtractionPipeline(
        section_extractor=setup.extractor(registry=registry or selector_registry, **extractor_kwargs),
        text_extractors=default_text_extractors(),
        parser=setup.parser(),
        confidence_threshold=setup.threshold,
        capture_html_on_failure=capture_html_on_failure,
        key_fn=setup.key_fn,
    )


async def run_section(
    section: str,
    document: Node,
    base_url: str = '',
    navigator: Optional[Navigator] = None,
    registry: Optional[SelectorRegistry] = None,
    context: Optional[Dict[str, str]] = None,
    detail_view: bool = False,
    **extractor_kwargs,
) -> PipelineResult:
    """Run one section and return the full result, diagnostics included."""
    pipeline = build_pipeline(section, registry=registry, **extractor_kwargs)
    return await pipeline.extract(SectionConfig(
        base_url=base_url,
        document=document,
        section_context=dict(context or {}),
        navigator=navigator,
        detail_view=detail_view,
    ))


async def _run_items(section: str, label: str, document: Node, base_url: str,
                     navigator: Optional[Navigator], registry: Optional[SelectorRegistry],
                     detail_view: bool = False, **extractor_kwargs) -> list:
    try:
        result = await run_section(
            section, document, base_url, navigator, registry, detail_view=detail_view, **extractor_kwargs,
        )
    except Exception as e:
        log.warning(f"Error getting {label}: {e}")
        return []

    diagnostics = result.diagnostics
    log.info(
        f"Got {len(result.items)} {label} "
        f"(extractor: {diagnostics.extractor_used or 'none'}, confidence: {diagnostics.avg_confidence:.2f})"
    )
    if not result.items:
        log.debug(f"{label} extraction failed. Extractors attempted: {', '.join(diagnostics.extractors_attempted)}")
    return result.items


async def get_experiences(document: Node, base_url: str = '', navigator: Optional[Navigator] = None,
                          registry: Optional[SelectorRegistry] = None, detail_view: bool = False) -> List[Experience]:
    return await _run_items('experience', 'experiences', document, base_url, navigator, registry, detail_view)


async def get_educations(document: Node, base_url: str = '', navigator: Optional[Navigator] = None,
                         registry: Optional[SelectorRegistry] = None, detail_view: bool = False) -> List[Education]:
    return await _run_items('education', 'educations', document, base_url, navigator, registry, detail_view)


async def get_patents(document: Node, base_url: str = '', navigator: Optional[Navigator] = None,
                      registry: Optional[SelectorRegistry] = None, detail_view: bool = False) -> List[Patent]:
    return await _run_items('patent', 'patents', document, base_url, navigator, registry, detail_view)


async def get_interests(document: Node, base_url: str = '', navigator: Optional[Navigator] = None,
                        registry: Optional[SelectorRegistry] = None, detail_view: bool = False) -> List[Interest]:
    return await _run_items('interest', 'interests', document, base_url, navigator, registry, detail_view)


async def get_contacts(document: Node, base_url: str = '', navigator: Optional[Navigator] = None,
                       registry: Optional[SelectorRegistry] = None, detail_view: bool = False) -> List[Contact]:
    return await _run_items('contact', 'contacts', document, base_url, navigator, registry, detail_view)


async def get_accomplishments(
    document: Node,
    base_url: str = '',
    navigator: Optional[Navigator] = None,
    registry: Optional[SelectorRegistry] = None,
    categories: Optional[List[Tuple[str, str, str]]] = None,
) -> List[Accomplishment]:
    """Every accomplishment kind in turn, merged and deduplicated by (category, title)."""
    accomplishments: List[Accomplishment] = []

    for url_path, category, heading in categories or ACCOMPLISHMENT_SECTIONS:
        accomplishments.extend(await _run_items(
            'accomplishment', f'{category} items', document, base_url, navigator, registry,
            url_path=url_path, category=category, heading=heading,
        ))

    return deduplicate_items(accomplishments, SECTION_SETUPS['accomplishment'].key_fn)


async def get_about(document: Node, registry: Optional[SelectorRegistry] = None) -> Optional[str]:
    items = await _run_items('about', 'about sections', document, '', None, registry)
    return items[0].text if items else None


async def get_top_card(document: Node, registry: Optional[SelectorRegistry] = None) -> Optional[TopCard]:
    items = await _run_items('top-card', 'top cards', document, '', None, registry)
    return items[0] if items else None


async def heal_section(
    document: Node,
    section: str,
    provider: Optional[SelfHealProvider],
    registry: Optional[SelectorRegistry] = None,
    activate: bool = True,
) -> Optional[SelectorVersion]:
    """
    Ask a self-heal provider for new selectors for a failing section.

    The proposal is registered (and activated unless activate=False) so the
    next run of the section picks it up.
    """
    registry = registry or selector_registry
    current = registry.get_section(section)
    failed = list(current.item_selectors) if current else []

    version = await attempt_self_heal(document, section, failed, provider=provider)
    if version is None:
        return None

    registry.register(version)
    if activate:
        registry.set_active_version(version.version)
    return version
