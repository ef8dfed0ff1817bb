"""
Modern two-column layout: contact and skills in a sidebar.
"""

from .base import BaseTemplate


class ModernTemplate(BaseTemplate):
    """Modern two-column resume template."""

    def get_template_string(self) -> str:
        return """{% import "macros.html.j2" as m %}<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<title>{{ full_name }} - Resume</title>
<style>
  body { font-family: "Helvetica Neue", Helvetica, Arial, sans-serif; margin: 0; color: #1f2933; font-size: 11.5px; line-height: 1.35; }
  .page { display: grid; grid-template-columns: 32% 68%; min-height: 100%; }
  .sidebar { background: #1e3a5f; color: #f0f4f8; padding: 18px 14px; }
  .sidebar h2 { color: #9fc5f8; border-bottom: 1px solid #3d5a80; }
  .sidebar ul { list-style: none; margin: 4px 0 0; padding: 0; }
  .sidebar li { margin: 3px 0; word-break: break-word; }
  .main { padding: 18px 18px 18px 16px; }
  h1 { font-size: 24px; margin: 0; color: #1e3a5f; }
  .title { font-size: 13px; color: #486581; margin-bottom: 8px; }
  h2 { font-size: 11px; text-transform: uppercase; letter-spacing: .1em; margin: 12px 0 4px; padding-bottom: 2px; border-bottom: 1px solid #d9e2ec; }
  .skill-group { margin: 4px 0; }
  .entry { margin-bottom: 8px; }
  .entry-title { font-weight: 700; }
  .entry-meta { color: #627d98; font-size: 10.5px; }
  ul { margin: 3px 0 0 14px; padding: 0; }
  li { margin: 2px 0; }
  p { margin: 0; }
</style>
</head>
<body>
<div class="page">
  <aside class="sidebar">
    {% if contact_items %}
    <section><h2>Contact</h2><ul>{% for item in contact_items %}<li>{{ item }}</li>{% endfor %}</ul></section>
    {% endif %}
    {% if skill_groups or skills_line %}
    <section><h2>Skills</h2>{{ m.skills_lines(skill_groups, skills_line) }}</section>
    {% endif %}
  </aside>
  <main class="main">
    <header>
      <h1>{{ full_name }}</h1>
      {% if title %}<div class="title">{{ title }}</div>{% endif %}
    </header>
    {% if summary %}
    <section><h2>Profile</h2><p>{{ summary }}</p></section>
    {% endif %}
    {% if experience %}
    <section><h2>Experience</h2>
    {% for exp in experience %}
      <div class="entry">
        <div class="entry-title">{{ exp.position }}{% if exp.position and exp.company %} at {% endif %}{{ exp.company }}</div>
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
        <div class="entry-title">{{ edu.institution }}</div>
        {% if edu.title or edu.dates %}<div class="entry-meta">{{ edu.title }}{% if edu.title and edu.dates %} · {% endif %}{{ edu.dates }}</div>{% endif %}
        {{ m.bullet_list(edu.bullets) }}
      </div>
    {% endfor %}
    </section>
    {% endif %}
    {% if achievements %}
    <section><h2>Achievements</h2>{{ m.bullet_list(achievements) }}</section>
    {% endif %}
    {% if projects %}
    <section><h2>Projects</h2>{% for project in projects %}{{ m.project_entry(project) }}{% endfor %}</section>
    {% endif %}
  </main>
</div>
</body>
</html>
"""
