"""
Writing template catalogs.

Each content type has its own catalog file in catalogs/{content_type}.yaml:

    content_type: email
    default: email-english
    templates:
      email-english:
        name: ...
        language: english
        tone: ...
        structure: [...]
        instruction: ...

Catalogs are loaded once, frozen, and never mutated afterwards. Lookups never fail:
an unknown or missing template id resolves to the catalog's default template.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from omegaconf import OmegaConf

from herald.contexts.templating.logger import log_catalog_loaded

CATALOGS_PATH = Path(__file__).resolve().parent / "catalogs"


class ContentType:
    """Enum-like class for content types"""

    COVER_LETTER = "cover-letter"
    EMAIL = "email"
    MESSAGE = "message"

    ALL = (COVER_LETTER, EMAIL, MESSAGE)

    # Content types that address a recruiter directly and need the sender's identity
    REQUIRES_IDENTITY = (EMAIL, MESSAGE)


CATALOG_FILES = {
    ContentType.COVER_LETTER: "cover_letter.yaml",
    ContentType.EMAIL: "email.yaml",
    ContentType.MESSAGE: "message.yaml",
}


@dataclass(frozen=True)
class Template:
    """
    A named tone/structure/instruction bundle used to shape a prompt.

    Attributes:
        id: Catalog key (e.g., 'email-hebrew')
        name: Display name
        content_type: One of ContentType.ALL
        language: 'english' or 'hebrew'
        tone: Declared tone, rendered into the prompt
        structure: Ordered section labels
        instruction: Instruction fragment rendered into the prompt
        description: Short description (cover letters only)
        platform: Delivery platform (recruiter messages only)
    """

    id: str
    name: str
    content_type: str
    language: str
    tone: str
    structure: Tuple[str, ...]
    instruction: str
    description: Optional[str] = None
    platform: Optional[str] = None

    @property
    def is_hebrew(self) -> bool:
        return self.language == "hebrew"


@dataclass(frozen=True)
class TemplateCatalog:
    """All templates of one content type plus the id of its default."""

    content_type: str
    default_id: str
    templates: Mapping[str, Template]

    @property
    def default(self) -> Template:
        return self.templates[self.default_id]

    def get(self, template_id: Optional[str]) -> Template:
        """Return the template for template_id, or the default if unknown/absent."""
        if template_id and template_id in self.templates:
            return self.templates[template_id]
        return self.default


def load_catalog(catalog_path: Path) -> TemplateCatalog:
    """
    Load and freeze one catalog file.

    Args:
        catalog_path: Path to a catalog YAML file

    Returns:
        TemplateCatalog with read-only template mapping

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        ValueError: If the catalog's default id isn't one of its templates
    """
    if not catalog_path.exists():
        raise FileNotFoundError(f"Template catalog not found at {catalog_path}")

    raw = OmegaConf.to_container(OmegaConf.load(catalog_path), resolve=True)
    content_type = raw["content_type"]

    templates: Dict[str, Template] = {}
    for template_id, entry in raw["templates"].items():
        templates[template_id] = Template(
            id=template_id,
            name=entry["name"],
            content_type=content_type,
            language=entry.get("language", "english"),
            tone=entry["tone"],
            structure=tuple(entry["structure"]),
            instruction=entry["instruction"],
            description=entry.get("description"),
            platform=entry.get("platform"),
        )

    default_id = raw["default"]
    if default_id not in templates:
        raise ValueError(
            f"Default template '{default_id}' not found in {catalog_path}. "
            f"Available templates: {list(templates)}"
        )

    return TemplateCatalog(
        content_type=content_type,
        default_id=default_id,
        templates=MappingProxyType(templates),
    )


class TemplateRegistry:
    """
    Read-only registry of the three template catalogs, keyed by content type.

    Catalogs are independent namespaces: 'professional' is both a cover letter and
    an email template, and the content type decides which one is meant.
    """

    def __init__(self, catalogs_path: Path = None):
        """
        Load every catalog.

        Args:
            catalogs_path: Directory holding the catalog files. Defaults to the
                           catalogs/ directory shipped with this package.
        """
        if catalogs_path is None:
            catalogs_path = CATALOGS_PATH

        self.catalogs_path = catalogs_path

        catalogs = {}
        for content_type, filename in CATALOG_FILES.items():
            catalog = load_catalog(catalogs_path / filename)
            if catalog.content_type != content_type:
                raise ValueError(
                    f"Catalog {filename} declares content_type '{catalog.content_type}', "
                    f"expected '{content_type}'"
                )
            catalogs[content_type] = catalog
            log_catalog_loaded(content_type, len(catalog.templates), catalog.default_id)

        self._catalogs: Mapping[str, TemplateCatalog] = MappingProxyType(catalogs)

    def get_catalog(self, content_type: str) -> TemplateCatalog:
        """
        Get the catalog for a content type.

        Raises:
            ValueError: If content_type isn't one of ContentType.ALL
        """
        if content_type not in self._catalogs:
            raise ValueError(
                f"Unknown content type: {content_type}. Use one of {list(ContentType.ALL)}"
            )
        return self._catalogs[content_type]

    def get_template(self, content_type: str, template_id: Optional[str] = None) -> Template:
        """
        Look up a template, falling back to the content type's default.

        Args:
            content_type: One of ContentType.ALL
            template_id: Template id (None, empty, or unknown -> default)

        Returns:
            Template (always usable)
        """
        return self.get_catalog(content_type).get(template_id)

    def get_default(self, content_type: str) -> Template:
        return self.get_catalog(content_type).default

    def list_templates(self, content_type: str) -> List[Template]:
        """All templates of a content type, in catalog order."""
        return list(self.get_catalog(content_type).templates.values())

    def has_template(self, content_type: str, template_id: str) -> bool:
        return template_id in self.get_catalog(content_type).templates


@lru_cache(maxsize=1)
def get_registry() -> TemplateRegistry:
    """Process-wide registry built from the packaged catalogs on first use."""
    return TemplateRegistry()


def get_template(content_type: str, template_id: Optional[str] = None) -> Template:
    """Shortcut for get_registry().get_template()."""
    return get_registry().get_template(content_type, template_id)
