"""
Creative layout: colored banner header and skill chips.
"""

from .base import BaseTemplate


class CreativeTemplate(BaseTemplate):
    """Creative resume template."""

    def get_template_string(self) -> str:
        return """{% import "macros.html.j2" as m %}<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<title>{{ full_name }} - Resume</title>
<style>
  body { font-family: "Trebuchet MS", Verdana, sans-serif; margin: 0; color: #2d2d2d; font-size: 11.8px; line-height: 1.35; }
  .banner { background: linear-gradient(120deg, #7b2ff7, #f107a3); color: #fff; padding: 20px 24px 16px; }
  .banner h1 { font-size: 28px; margin: 0; }
  .banner .title { font-size: 14px; opacity: .9; }
  .banner .contact { font-size: 11px; margin-top: 6px; opacity: .85; }
  .content { padding: 8px 24px 16px; }
  h2 { font-size: 13px; color: #7b2ff7; margin: 12px 0 4px; }
  h2::before { content: ""; display: inline-block; width: 10px; height: 10px; border-radius: 50%; background: #f107a3; margin-right: 6px; }
  .chips { display: flex; flex-wrap: wrap; gap: 4px; }
  .chip { background: #f3e8ff; color: #5b21b6; border-radius: 10px; padding: 2px 8px; font-size: 10.5px; }
  .chip-category { font-weight: 700; color: #7b2ff7; margin: 4px 0 2px; }
  .entry { margin-bottom: 8px; padding-left: 8px; border-left: 2px solid #f3e8ff; }
  .entry-title { font-weight: 700; }
  .entry-meta { color: #888; font-size: 10.5px; }
  ul { margin: 3px 0 0 14px; padding: 0; }
  li { margin: 2px 0; }
  p { margin: 0; }
</style>
</head>
<body>
<div class="banner">
  <h1>{{ full_name }}</h1>
  {% if title %}<div class="title">{{ title }}</div>{% endif %}
  {% if contact %}<div class="contact">{{ contact }}</div>{% endif %}
</div>
<div class="content">
{% if summary %}<section><h2>Hello!</h2><p>{{ summary }}</p></section>{% endif %}
{% if skill_groups or skills_line %}
<section><h2>Skills</h2>
{% if skill_groups %}
{% for group in skill_groups %}
  <div class="chip-category">{{ group.category }}</div>
  <div class="chips">{% for item in group["items"] %}<span class="chip">{{ item }}</span>{% endfor %}</div>
{% endfor %}
{% else %}<p>{{ skills_line }}</p>{% endif %}
</section>
{% endif %}
{% if experience %}
<section><h2>Experience</h2>
{% for exp in experience %}
  <div class="entry">
    <div class="entry-title">{{ exp.heading }}</div>
    {% if exp.meta %}<div class="entry-meta">{{ exp.meta }}</div>{% endif %}
    {{ m.bullet_list(exp.bullets) }}
  </div>
{% endfor %}
</section>
{% endif %}
{% if projects %}<section><h2>Projects</h2>{% for project in projects %}{{ m.project_entry(project) }}{% endfor %}</section>{% endif %}
{% if education %}
<section><h2>Education</h2>
{% for edu in education %}
  <div class="entry">
    <div class="entry-title">{{ edu.institution }}</div>
    {% if edu.title or edu.dates %}<div class="entry-meta">{{ edu.title }}{% if edu.title and edu.dates %} · {% endif %}{{ edu.dates }}</div>{% endif %}
    {{ m.bullet_list(edu.bullets) }}
  </div>
{% endfor %}
</section>
{% endif %}
{% if achievements %}<section><h2>Achievements</h2>{{ m.bullet_list(achievements) }}</section>{% endif %}
</div>
</body>
</html>
"""
