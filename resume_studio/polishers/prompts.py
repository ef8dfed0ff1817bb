"""
Prompt templates for per-section resume polishing.

Prompts stay short to keep token usage low on free provider tiers. Every
section receives only its own data as a JSON string in ``{data}``.
"""

from langchain_core.prompts import ChatPromptTemplate

_NO_FABRICATION = (
    "NEVER invent employers, technologies, certifications or metrics that are "
    "not present in the input. Preserve all factual numbers exactly."
)

SUMMARY_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You refine resume summaries. Keep it specific to the candidate, avoid "
            "generic cliches, at most 60 words, no headings. If the provided summary "
            "is empty, write one from the title, skills and experience context. "
            f"{_NO_FABRICATION} Output plain text only.",
        ),
        ("user", "Rewrite this into a sharp resume summary: {data}"),
    ]
)

EXPERIENCE_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You create quantified, action-oriented resume bullets (3-5) strictly as "
            f"a JSON array of strings. No markdown. {_NO_FABRICATION}",
        ),
        ("user", "From this single experience, output bullets: {data}"),
    ]
)

EDUCATION_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You produce 1-3 concise education bullets focusing on achievements or "
            f"focus areas, as a JSON array of strings only. {_NO_FABRICATION}",
        ),
        ("user", "From this education entry, output bullets: {data}"),
    ]
)

SKILLS_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "From the provided skills, return a single comma-separated line of the "
            "most relevant skills (at most 25 items). Only use skills from the input. "
            "Output plain text only.",
        ),
        ("user", "Skills: {data}"),
    ]
)

ACHIEVEMENTS_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "Polish achievements into concise resume bullets (max 5). Output a JSON "
            f"array of strings. {_NO_FABRICATION}",
        ),
        ("user", "Achievements: {data}"),
    ]
)

PROJECTS_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "Summarize each project with its impact, stack and role in one resume "
            f"bullet. Output a JSON array of strings. {_NO_FABRICATION}",
        ),
        ("user", "Projects: {data}"),
    ]
)
