import json
from typing import Dict, Optional


def system_instruction(persona: str) -> str:
    instructions = {
        "validator": "You are a conversational assistant validating user responses in a chat interface. "
                     "Respond only with raw JSON.",
        "summarizer": """You are a helpful assistant that summarizes user information in a natural, conversational way.
Your task is to take the raw user input and rephrase it in a clear, professional, and easy-to-scan format.
Do NOT just repeat what the user said - show understanding by summarizing it in your own words.
Make it more readable and organized. Be concise but comprehensive.""",
        "editor": "You are a professional content editor.",
    }
    return instructions.get(persona.lower(), "You are a helpful assistant. Provide accurate and relevant information.")


def validation_prompt(question: str, answer: str) -> str:
    return f"""Question asked: "{question}"
User's answer: "{answer}"

Analyze if the answer appropriately addresses the question. Consider:
1. Does the answer relate to what was asked?
2. Is it specific and meaningful (not just generic words)?
3. Does it provide useful information?

Respond with a JSON object:
{{
  "isValid": true/false,
  "feedback": "brief message to user explaining why their answer doesn't work and what you need instead",
  "acknowledgment": "brief, natural acknowledgment of what they shared (only if valid)"
}}

Examples:
- If asked "What's the name of your project?" and they say "Hello my name is Derek", respond with isValid: false and feedback asking specifically for the PROJECT name, not their personal name.
- If asked about technologies and they say "i used my hands", respond with isValid: false asking for specific software, programming languages, frameworks, or tools used.
- If the answer is too vague or nonsensical, ask for more specific details."""


def summary_prompt(form_data: Dict[str, str], content_type: str) -> str:
    collected = "\n".join(f"{key}: {value}" for key, value in form_data.items())
    return f"""Please summarize the following information about a {content_type} in a natural, conversational way.
Make it easy to read and scan. Group related information together.

Information collected:
{collected}

Provide a brief, natural summary that shows you understand what the user shared. Format it in a scannable way with bullet points or short paragraphs."""


# content type -> (persona template, user prompt heading, ordered (label, key) pairs)
CONTENT_PROMPTS = {
    "bio": (
        "You are a professional content writer specializing in personal bios. Create a compelling, professional bio "
        "in {tone} perspective. The bio should be approximately {word_limit} words and highlight the person's skills, "
        "experience, and achievements in a natural, engaging way.",
        "Create a professional bio with the following information:",
        [("Name", "name"), ("Skills", "skills"), ("Experience", "experience"), ("Achievements", "achievements")],
    ),
    "project": (
        "You are a technical writer specializing in project documentation. Create a clear, professional project "
        "summary in {tone} perspective. The summary should be approximately {word_limit} words and effectively "
        "communicate the project's objectives, technical aspects, achievements, and impact.",
        "Create a project summary with the following information:",
        [("Project Name", "projectName"), ("Objective", "objective"), ("Technologies", "technologies"),
         ("Achievements", "achievements"), ("Impact", "impact")],
    ),
    "reflection": (
        "You are an educational content writer specializing in learning reflections. Create a thoughtful, insightful "
        "learning reflection in {tone} perspective. The reflection should be approximately {word_limit} words and "
        "demonstrate deep understanding, critical thinking, and personal growth.",
        "Create a learning reflection with the following information:",
        [("Topic", "topic"), ("Context", "context"), ("Key Learnings", "keyLearnings"),
         ("Challenges", "challenges"), ("Future Application", "application")],
    ),
}


def content_prompt(content_type: str, tone: str, word_limit: int, input_data: Dict[str, str]) -> Optional[tuple]:
    """Returns (persona, prompt) for a first draft, or None for an unsupported content type."""
    template = CONTENT_PROMPTS.get(content_type)
    if template is None:
        return None

    persona_template, heading, fields = template
    lines = [heading]
    for label, key in fields:
        lines.append(f"{label}: {input_data.get(key, '')}")

    return persona_template.format(tone=tone, word_limit=word_limit), "\n".join(lines)


def refinement_prompt(refinement: str, tone: str, word_limit: int, input_data: Dict[str, str]) -> tuple:
    persona = (
        f"{system_instruction('editor')} Take the existing content and refine it based on the user's instructions. "
        f"Maintain the same approximate word count ({word_limit} words) and {tone} perspective."
    )
    existing = input_data.get("existingContent") or json.dumps(input_data)
    prompt = f'Refine the following content based on these instructions: "{refinement}"\n\nExisting content:\n{existing}'
    return persona, prompt
