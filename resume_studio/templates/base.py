"""
Base template class and view model for HTML resume rendering.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Optional

import jinja2

from ..models import EducationEntry, PolishedResume, WorkExperienceEntry

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")

# Shared macros, importable from every layout as "macros.html.j2"
MACROS = """
{% macro bullet_list(items, cls="") -%}
{% if items %}<ul{% if cls %} class="{{ cls }}"{% endif %}>{% for item in items %}<li>{{ item }}</li>{% endfor %}</ul>{% endif %}
{%- endmacro %}

{% macro skills_lines(skill_groups, skills_line) -%}
{% if skill_groups %}
{% for group in skill_groups %}<div class="skill-group"><strong>{{ group.category }}</strong>: {{ group["items"] | join(", ") }}</div>
{% endfor %}
{% elif skills_line %}<p>{{ skills_line }}</p>{% endif %}
{%- endmacro %}

{% macro project_entry(project) -%}
{% if project.text %}<div class="project">{{ project.text }}</div>
{% else %}<div class="project"><div class="project-header"><strong>{{ project.name }}</strong>{% for part in project.details %} | {{ part }}{% endfor %}</div>
{{ bullet_list(project.bullets) }}</div>
{% endif %}
{%- endmacro %}
"""


def normalize_whitespace(text: Optional[str]) -> str:
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def sentence_split(text: Optional[str]) -> list[str]:
    """Split a description into sentence bullets after collapsing whitespace."""
    cleaned = normalize_whitespace(text)
    if not cleaned:
        return []
    return [part for part in _SENTENCE_SPLIT.split(cleaned) if part]


def _capitalize(part: str) -> str:
    part = part.strip()
    return part[:1].upper() + part[1:]


def _date_range(start: Optional[str], end: Optional[str], current: bool = False) -> str:
    end_label = end or ("Present" if current else "")
    return " – ".join(d for d in (start, end_label) if d)


def _strip_scheme(link: str) -> str:
    return re.sub(r"/$", "", re.sub(r"^https?://", "", link.strip()))


def _experience_view(entry: WorkExperienceEntry, bullets: Optional[list[str]]) -> dict[str, Any]:
    dates = _date_range(entry.start_date, entry.end_date, entry.current)
    return {
        "position": entry.position,
        "company": entry.company,
        "heading": " · ".join(p for p in (entry.position, entry.company) if p),
        "dates": dates,
        "location": entry.location or "",
        "meta": " · ".join(p for p in (dates, entry.location) if p),
        "bullets": bullets if bullets else sentence_split(entry.description),
    }


def _education_view(entry: EducationEntry, bullets: Optional[list[str]]) -> dict[str, Any]:
    title = entry.degree + (f" — {entry.field}" if entry.field else "")
    return {
        "institution": entry.institution,
        "degree": entry.degree,
        "field": entry.field,
        "title": title.strip(),
        "dates": _date_range(entry.start_date, entry.end_date),
        "gpa": entry.gpa or "",
        "bullets": bullets if bullets else sentence_split(entry.description),
    }


def group_skills(polished: PolishedResume) -> list[dict[str, Any]]:
    """Skills grouped by category in first-appearance order; level in parentheses."""
    groups: dict[str, list[str]] = {}
    for skill in polished.source.skills:
        category = (skill.category or "").strip() or "Other"
        label = skill.name + (f" ({skill.level})" if skill.level else "")
        groups.setdefault(category, []).append(label)
    return [{"category": c, "items": items} for c, items in groups.items()]


def build_view(polished: PolishedResume) -> dict[str, Any]:
    """
    Flatten a polished resume into the context every layout renders.

    Each enhancement falls back to its original field, so a layout renders
    a failed section exactly as it would render the unpolished input.
    """
    source = polished.source
    info = source.personal_info

    contact_items = [
        v for v in (info.email, info.phone, info.location, info.linkedin, info.website) if v
    ]

    skill_groups = group_skills(polished)

    if polished.achievements_polished:
        achievements = list(polished.achievements_polished)
    else:
        achievements = []
        for a in source.achievements:
            line = a.title + (f" ({a.date})" if a.date else "")
            if a.description:
                line += f" — {a.description}"
            achievements.append(line)

    if polished.projects_polished:
        projects = [{"text": p} for p in polished.projects_polished]
    else:
        projects = []
        for p in source.projects:
            details = []
            if p.technologies:
                details.append(", ".join(p.technologies))
            if p.link:
                details.append(_strip_scheme(p.link))
            projects.append(
                {
                    "text": None,
                    "name": p.name,
                    "details": details,
                    "bullets": sentence_split(p.description),
                }
            )

    return {
        "full_name": " ".join(
            _capitalize(n) for n in (info.first_name, info.last_name) if n.strip()
        ),
        "first_name": _capitalize(info.first_name),
        "last_name": _capitalize(info.last_name),
        "title": info.title,
        "contact": " · ".join(contact_items),
        "contact_items": contact_items,
        "summary": normalize_whitespace(polished.summary or info.summary),
        "skill_groups": skill_groups,
        "skills_line": None if skill_groups else (polished.skills_line or None),
        "experience": [
            _experience_view(w, polished.experience_bullets.get(i))
            for i, w in enumerate(source.work_experience)
        ],
        "education": [
            _education_view(e, polished.education_bullets.get(i))
            for i, e in enumerate(source.education)
        ],
        "achievements": achievements,
        "projects": projects,
    }


class BaseTemplate(ABC):
    """Abstract base class for HTML resume layouts."""

    def __init__(self):
        self.env = self._create_jinja_env()

    def _create_jinja_env(self) -> jinja2.Environment:
        """Create Jinja2 environment with HTML autoescaping and the shared macros."""
        return jinja2.Environment(
            loader=jinja2.DictLoader({"macros.html.j2": MACROS}),
            autoescape=jinja2.select_autoescape(["html", "j2"], default_for_string=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @abstractmethod
    def get_template_string(self) -> str:
        """Return the Jinja2 template string."""
        pass

    def render(self, polished: PolishedResume) -> str:
        """
        Render the layout with resume data.

        Args:
            polished: Polished resume (enhancements optional)

        Returns:
            Complete HTML document
        """
        template = self.env.from_string(self.get_template_string())
        return template.render(**build_view(polished))
