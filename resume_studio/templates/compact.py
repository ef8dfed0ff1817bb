"""
Compact layout: dense small type to fit long histories on one page.
"""

from .base import BaseTemplate


class CompactTemplate(BaseTemplate):
    def get_template_string(self) -> str:
        return """{% import "macros.html.j2" as m %}<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<title>{{ full_name }} - Resume</title>
<style>
  body { font-family: Arial, Helvetica, sans-serif; margin: 4px 6px; color: #000; font-size: 10px; line-height: 1.2; }
  header { display: flex; justify-content: space-between; align-items: baseline; border-bottom: 1px solid #000; padding-bottom: 2px; }
  h1 { font-size: 16px; margin: 0; }
  .title { font-weight: 700; }
  .contact { font-size: 9.5px; text-align: right; }
  h2 { font-size: 10px; text-transform: uppercase; margin: 5px 0 1px; background: #eee; padding: 1px 3px; }
  .entry { margin: 2px 0 3px; }
  .entry-line { display: flex; justify-content: space-between; }
  .entry-line b { margin-right: 6px; }
  ul { margin: 1px 0 0 12px; padding: 0; }
  li { margin: 0; }
  p { margin: 0; }
  .skill-group { display: inline; margin-right: 8px; }
</style>
</head>
<body>
<header>
  <div><h1>{{ full_name }}</h1>{% if title %}<span class="title">{{ title }}</span>{% endif %}</div>
  {% if contact %}<div class="contact">{{ contact }}</div>{% endif %}
</header>
{% if summary %}<h2>Summary</h2><p>{{ summary }}</p>{% endif %}
{% if skill_groups or skills_line %}<h2>Skills</h2>{{ m.skills_lines(skill_groups, skills_line) }}{% endif %}
{% if experience %}
<h2>Experience</h2>
{% for exp in experience %}
<div class="entry">
  <div class="entry-line"><span><b>{{ exp.position }}</b>{{ exp.company }}{% if exp.location %}, {{ exp.location }}{% endif %}</span><span>{{ exp.dates }}</span></div>
  {{ m.bullet_list(exp.bullets) }}
</div>
{% endfor %}
{% endif %}
{% if education %}
<h2>Education</h2>
{% for edu in education %}
<div class="entry">
  <div class="entry-line"><span><b>{{ edu.institution }}</b>{{ edu.title }}{% if edu.gpa %} (GPA {{ edu.gpa }}){% endif %}</span><span>{{ edu.dates }}</span></div>
  {{ m.bullet_list(edu.bullets) }}
</div>
{% endfor %}
{% endif %}
{% if projects %}<h2>Projects</h2>{% for project in projects %}{{ m.project_entry(project) }}{% endfor %}{% endif %}
{% if achievements %}<h2>Achievements</h2>{{ m.bullet_list(achievements) }}{% endif %}
</body>
</html>
"""
