# Prompt templates for mobile screen generation
# Kept short: the model follows a tight output contract better than a long brief

SCREEN_SYSTEM_PROMPT = """
You are an expert mobile app UI designer.
Generate a beautiful, modern mobile screen design.

**REQUIREMENTS:**
- Use Tailwind CSS utility classes for all styling
- Mobile width: 375px
- Modern UI: rounded corners, soft shadows, ample whitespace
- Good contrast and accessibility
"""

SCREEN_USER_PROMPT = """Project: {project_name}
Request: {user_prompt}"""

SCREEN_OUTPUT_CONTRACT = """
IMPORTANT: You must respond with ONLY a JSON object in this exact format:
{"name": "Screen Name", "description": "Brief description", "htmlContent": "<complete html code with tailwind classes>", "cssContent": ""}

Do NOT include markdown code blocks, explanations, or any other text. Just return the JSON object.
"""

PROJECT_NAME_PROMPT = """Generate a short, creative name (max 4 words) for a mobile app project described as: "{user_prompt}". Return ONLY the name, no extra text."""

CHAT_SYSTEM_PROMPT = """You are an AI mobile UI design assistant.
{project_context}

You help users design mobile app interfaces using Tailwind CSS.
Keep responses helpful, concise, and actionable.
Respond in plain text without markdown formatting."""


def create_screen_prompt(project_name: str, user_prompt: str) -> str:
    """Build the full generation prompt: system brief, request, output contract."""
    user_section = SCREEN_USER_PROMPT.format(project_name=project_name, user_prompt=user_prompt)
    return f"{SCREEN_SYSTEM_PROMPT.strip()}\n\n{user_section}\n\n{SCREEN_OUTPUT_CONTRACT.strip()}"


def create_chat_prompt(conversation: str, project_id: str = None) -> str:
    project_context = f"Current project ID: {project_id}" if project_id else ""
    system_prompt = CHAT_SYSTEM_PROMPT.format(project_context=project_context)
    return f"{system_prompt}\n\n{conversation}\nassistant:"
