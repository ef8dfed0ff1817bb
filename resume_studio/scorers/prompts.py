"""
Instructions for the multimodal resume analysis call.
"""

SCORE_SCHEMA = (
    '{"total":number,'
    '"weights":{"keywordMatch":25,"structureFormatting":15,"grammarClarity":15,'
    '"experienceRelevance":20,"designLayout":25},'
    '"extractedText":string,'
    '"sections":{"experience":boolean,"education":boolean,"skills":boolean,'
    '"projects":boolean,"achievements":boolean,"certifications":boolean,"contact":boolean},'
    '"keywords":{"extractedKeywords":string[],"present":string[],"missing":string[],'
    '"coveragePercent":number},'
    '"readability":{"fleschKincaidGrade":number|null,"colemanLiauIndex":number|null,'
    '"readingEase":number|null,"avgSentenceLength":number|null,'
    '"complexSentenceRatio":number|null},'
    '"design":{"fontVariety":number,"bulletUsage":number,"hasConsistentHeaders":boolean,'
    '"excessiveWhitespace":boolean,"alignmentSignals":"good"|"mixed"|"poor"},'
    '"recommendations":{"quickWins":string[],"addKeywords":string[],"addSections":string[],'
    '"bulletExamples":string[]},'
    '"categories":{'
    '"keywordMatch":{"score":number,"reasons":string[],"suggestions":string[]},'
    '"structureFormatting":{"score":number,"reasons":string[],"suggestions":string[]},'
    '"grammarClarity":{"score":number,"reasons":string[],"suggestions":string[],'
    '"issues":[{"type":"spelling"|"grammar"|"clarity"|"style","message":string,'
    '"example":string,"suggestion":string}]},'
    '"experienceRelevance":{"score":number,"reasons":string[],"suggestions":string[]},'
    '"designLayout":{"score":number,"reasons":string[],"suggestions":string[]}}}'
)

SCORE_SYSTEM_PROMPT = (
    "You are an expert resume reviewer. Analyze the provided resume IMAGES (not text) "
    "and the job description. Every category score is an integer from 0 to 100. "
    "Return ONLY a single JSON object that strictly matches this schema's keys and "
    f"structure: {SCORE_SCHEMA}"
)


def build_user_text(job_description: str, user_skills: list[str]) -> str:
    return f"Job description:\n{job_description}\n\nUser skills: {', '.join(user_skills)}"
