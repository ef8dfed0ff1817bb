"""
Elegant serif layout with a centered decorative header.
"""

from .base import BaseTemplate


class ElegantTemplate(BaseTemplate):
    """Elegant serif resume template."""

    def get_template_string(self) -> str:
        return """{% import "macros.html.j2" as m %}<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<title>{{ full_name }} - Resume</title>
<style>
  body { font-family: Georgia, "Times New Roman", serif; margin: 18px 28px; color: #2b2b2b; font-size: 12.5px; line-height: 1.4; }
  header { text-align: center; margin-bottom: 10px; }
  h1 { font-size: 26px; font-weight: normal; letter-spacing: .12em; text-transform: uppercase; margin: 0; }
  .title { font-style: italic; color: #6b5b3e; margin-top: 2px; }
  .ornament { color: #a08c5b; letter-spacing: .5em; margin: 4px 0; }
  .contact { font-size: 11px; color: #555; }
  h2 { font-size: 13px; font-weight: normal; font-variant: small-caps; letter-spacing: .12em; text-align: center; color: #6b5b3e; margin: 14px 0 6px; }
  h2::before, h2::after { content: " ~ "; color: #a08c5b; }
  .entry { margin-bottom: 8px; }
  .entry-head { display: flex; justify-content: space-between; }
  .entry-title { font-weight: bold; }
  .entry-dates, .entry-sub { font-style: italic; color: #666; }
  ul { margin: 3px 0 0 18px; padding: 0; }
  li { margin: 2px 0; }
  p { margin: 0; text-align: justify; }
</style>
</head>
<body>
<header>
  <h1>{{ full_name }}</h1>
  {% if title %}<div class="title">{{ title }}</div>{% endif %}
  <div class="ornament">&#10022;&#10022;&#10022;</div>
  {% if contact %}<div class="contact">{{ contact }}</div>{% endif %}
</header>
{% if summary %}<section><h2>Profile</h2><p>{{ summary }}</p></section>{% endif %}
{% if experience %}
<section><h2>Professional Experience</h2>
{% for exp in experience %}
  <div class="entry">
    <div class="entry-head"><span class="entry-title">{{ exp.company }}</span><span class="entry-dates">{{ exp.dates }}</span></div>
    {% if exp.position or exp.location %}<div class="entry-sub">{{ exp.position }}{% if exp.position and exp.location %}, {% endif %}{{ exp.location }}</div>{% endif %}
    {{ m.bullet_list(exp.bullets) }}
  </div>
{% endfor %}
</section>
{% endif %}
{% if education %}
<section><h2>Education</h2>
{% for edu in education %}
  <div class="entry">
    <div class="entry-head"><span class="entry-title">{{ edu.institution }}</span><span class="entry-dates">{{ edu.dates }}</span></div>
    {% if edu.title %}<div class="entry-sub">{{ edu.title }}</div>{% endif %}
    {{ m.bullet_list(edu.bullets) }}
  </div>
{% endfor %}
</section>
{% endif %}
{% if skill_groups or skills_line %}<section><h2>Skills</h2>{{ m.skills_lines(skill_groups, skills_line) }}</section>{% endif %}
{% if achievements %}<section><h2>Honours &amp; Achievements</h2>{{ m.bullet_list(achievements) }}</section>{% endif %}
{% if projects %}<section><h2>Selected Projects</h2>{% for project in projects %}{{ m.project_entry(project) }}{% endfor %}</section>{% endif %}
</body>
</html>
"""
