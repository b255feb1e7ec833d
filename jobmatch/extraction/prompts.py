"""Prompt template for field extraction."""

EXTRACTION_PROMPT = """Extract Title, Technologies, Seniority, Remote (true/false), SalaryRange from this job post as JSON.

Use exactly these keys:
- "Title": the job title (string)
- "Technologies": the technologies, languages, frameworks and tools the post asks for (array of strings)
- "Seniority": e.g. "Junior", "Mid", "Senior", "Lead" (string or null)
- "Remote": true if the role is remote, false if not (boolean or null)
- "SalaryRange": the salary range as written (string or null)

Respond with valid JSON only, no markdown.

Post:
{post}"""


def build_extraction_prompt(post_text: str) -> str:
    return EXTRACTION_PROMPT.format(post=post_text)
