"""
Minimal layout: sparse typography, no rules or color.
"""

from .base import BaseTemplate


class MinimalTemplate(BaseTemplate):
    def get_template_string(self) -> str:
        return """{% import "macros.html.j2" as m %}<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<title>{{ full_name }} - Resume</title>
<style>
  body { font-family: -apple-system, "Segoe UI", Roboto, sans-serif; margin: 24px 32px; color: #222; font-size: 12px; line-height: 1.5; }
  h1 { font-size: 20px; font-weight: 400; letter-spacing: .02em; margin: 0; }
  .title, .contact { color: #777; }
  h2 { font-size: 10px; font-weight: 600; text-transform: uppercase; letter-spacing: .2em; color: #999; margin: 20px 0 6px; }
  .entry { margin-bottom: 10px; }
  .entry-meta { color: #999; }
  ul { margin: 2px 0 0; padding-left: 14px; }
  li { margin: 1px 0; }
  p { margin: 0; }
</style>
</head>
<body>
<header>
  <h1>{{ full_name }}</h1>
  {% if title %}<div class="title">{{ title }}</div>{% endif %}
  {% if contact %}<div class="contact">{{ contact }}</div>{% endif %}
</header>
{% if summary %}<section><h2>About</h2><p>{{ summary }}</p></section>{% endif %}
{% if experience %}
<section><h2>Experience</h2>
{% for exp in experience %}
  <div class="entry">
    <div>{{ exp.heading }}</div>
    {% if exp.meta %}<div class="entry-meta">{{ exp.meta }}</div>{% endif %}
    {{ m.bullet_list(exp.bullets) }}
  </div>
{% endfor %}
</section>
{% endif %}
{% if education %}
<section><h2>Education</h2>
{% for edu in education %}
  <div class="entry">
    <div>{{ edu.institution }}</div>
    {% if edu.title %}<div>{{ edu.title }}</div>{% endif %}
    {% if edu.dates %}<div class="entry-meta">{{ edu.dates }}</div>{% endif %}
    {{ m.bullet_list(edu.bullets) }}
  </div>
{% endfor %}
</section>
{% endif %}
{% if skill_groups or skills_line %}<section><h2>Skills</h2>{{ m.skills_lines(skill_groups, skills_line) }}</section>{% endif %}
{% if projects %}<section><h2>Projects</h2>{% for project in projects %}{{ m.project_entry(project) }}{% endfor %}</section>{% endif %}
{% if achievements %}<section><h2>Achievements</h2>{{ m.bullet_list(achievements) }}</section>{% endif %}
</body>
</html>
"""
