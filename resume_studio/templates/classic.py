"""
Classic single-column layout with ruled section headings.
"""

from .base import BaseTemplate


class ClassicTemplate(BaseTemplate):
    """Classic resume template."""

    def get_template_string(self) -> str:
        return """{% import "macros.html.j2" as m %}<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>{{ full_name }} - Resume</title>
<style>
  body { font-family: Arial, Helvetica, sans-serif; margin: 6px 10px; color: #111; line-height: 1.30; font-size: 12.2px; }
  h1 { font-size: 22px; margin: 0 0 2px; }
  h2 { font-size: 11.8px; text-transform: uppercase; letter-spacing: .08em; color: #333; margin: 8px 0 0; border-bottom: 0.5px solid #cfcfcf; padding-bottom: 2px; }
  .title { font-weight: 700; color: #222; }
  .muted { color: #555; }
  .section { margin-top: 8px; }
  .section-content { margin-left: 10px; margin-top: 3px; }
  p { margin: 0; }
  ul { margin: 2px 0 0 16px; padding: 0; }
  li { margin: 2px 0; }
  .entry-header { font-weight: 700; }
  .meta { color: #555; margin-top: 1px; }
  .entry + .entry { margin-top: 4px; }
  @media print { a { color: black !important; text-decoration: none } }
</style>
</head>
<body>
<header>
  <h1>{{ full_name }}</h1>
  {% if title %}<div class="title">{{ title }}</div>{% endif %}
  {% if contact %}<div class="muted">{{ contact }}</div>{% endif %}
</header>
{% if summary %}
<section class="section"><h2>Summary</h2><div class="section-content"><p>{{ summary }}</p></div></section>
{% endif %}
{% if skill_groups or skills_line %}
<section class="section"><h2>Skills</h2><div class="section-content">{{ m.skills_lines(skill_groups, skills_line) }}</div></section>
{% endif %}
{% if experience %}
<section class="section"><h2>Experience</h2><div class="section-content">
{% for exp in experience %}
  <div class="entry">
    <div class="entry-header">{{ exp.heading }}</div>
    {% if exp.meta %}<div class="meta">{{ exp.meta }}</div>{% endif %}
    {{ m.bullet_list(exp.bullets) }}
  </div>
{% endfor %}
</div></section>
{% endif %}
{% if education %}
<section class="section"><h2>Education</h2><div class="section-content">
{% for edu in education %}
  <div class="entry">
    <div><strong>{{ edu.institution }}</strong></div>
    {% if edu.title %}<div class="muted">{{ edu.title }}</div>{% endif %}
    {% if edu.dates %}<div class="meta">{{ edu.dates }}</div>{% endif %}
    {{ m.bullet_list(edu.bullets) }}
  </div>
{% endfor %}
</div></section>
{% endif %}
{% if achievements %}
<section class="section"><h2>Achievements</h2><div class="section-content">{{ m.bullet_list(achievements) }}</div></section>
{% endif %}
{% if projects %}
<section class="section"><h2>Projects</h2><div class="section-content">
{% for project in projects %}{{ m.project_entry(project) }}{% endfor %}
</div></section>
{% endif %}
</body>
</html>
"""
