"""Front matter extraction for HTML pages.

Pages declare their route as a YAML block at the very top of the file:

    ---
    name: home
    url: /
    ---
    <h1>Home</h1>

The closing delimiter may also be ``...``. Anything before the opening
``---`` (other than a UTF-8 BOM) means the page has no front matter.
"""

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

from front_router.errors import FrontMatterError

_FRONT_MATTER_RE = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


@dataclass(frozen=True)
class FrontMatter:
    """A document split into its front-matter attributes and body."""

    attributes: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    has_front_matter: bool = False


def extract_front_matter(content: str) -> FrontMatter:
    """
    Split a document into YAML attributes and body.

    Args:
        content: Full document text

    Returns:
        FrontMatter with parsed attributes and the remaining body

    Raises:
        FrontMatterError: If the YAML is invalid or is not a mapping
    """
    match = _FRONT_MATTER_RE.match(content)
    if not match:
        return FrontMatter(attributes={}, body=content, has_front_matter=False)

    try:
        attributes = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML in front matter: {e}") from e

    if not isinstance(attributes, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(attributes).__name__}"
        )

    return FrontMatter(
        attributes=attributes,
        body=content[match.end():],
        has_front_matter=True,
    )

