"""
Template Rendering Module

Pure functions for substituting version fields into tag patterns.
"""

from typing import Dict, Mapping

from .models import DateVersion, SemanticVersion, VersionInfo
from .pattern_matching import PLACEHOLDER_RE


def render_template(template: str, fields: Mapping[str, object]) -> str:
    """
    Replace each ``${key}`` in a template with its field value.

    Placeholders without a value are left in the output unchanged.

    Args:
        template: Tag pattern with ``${...}`` placeholders
        fields: Placeholder values

    Returns:
        The rendered tag
    """
    def substitute(match):
        value = fields.get(match.group(1))
        return match.group(0) if value is None else str(value)

    return PLACEHOLDER_RE.sub(substitute, template)


def _suffix_placeholder(template: str) -> str:
    """Name of the placeholder a prerelease/build suffix is attached to."""
    if template.rfind("${subPatch}") > template.rfind("${patch}"):
        return "subPatch"
    return "patch"


def version_fields(info: VersionInfo, template: str = "") -> Dict[str, str]:
    """
    Build the placeholder values of a version.

    Semantic prerelease and build suffixes are attached to the last numeric
    placeholder, so ``v${major}.${minor}.${patch}`` renders ``v1.2.4-alpha.0``.

    Args:
        info: Version to render
        template: Template the fields are meant for

    Returns:
        Dictionary of placeholder name to value
    """
    fields: Dict[str, str] = {}

    if isinstance(info, SemanticVersion):
        fields.update(
            major=str(info.major),
            minor=str(info.minor),
            patch=str(info.patch),
            subPatch=str(info.sub_patch or 0),
        )
        suffix = ""
        if info.prerelease:
            suffix += f"-{info.prerelease}"
        if info.build:
            suffix += f"+{info.build}"
        if suffix:
            fields[_suffix_placeholder(template)] += suffix
    elif isinstance(info, DateVersion):
        fields["YYYYMMDD"] = info.date_str
        fields["n"] = str(info.serial if info.serial is not None else 1)
    else:
        fields["n"] = str(info.number)

    return fields


def native_pattern(info: VersionInfo) -> str:
    """Return the pattern a detected tag is written in."""
    if isinstance(info, SemanticVersion):
        return info.prefix + "${major}.${minor}.${patch}"
    if isinstance(info, DateVersion):
        return info.prefix + "${YYYYMMDD}"
    return info.prefix + "${n}"


def render_version(template: str, info: VersionInfo) -> str:
    """Render a version into a template."""
    return render_template(template, version_fields(info, template))
