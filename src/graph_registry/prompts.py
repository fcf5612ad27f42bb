"""Prompt templates for details generation."""

DETAILS_SYSTEM_PROMPT = """You are an AI assistant tasked with generating a concise and relevant title and description for a subindex based on chat history. Based on the discussion in the chat history, you will generate a title and description for the subindex. The title should be a short phrase that captures the essence of the subindex, while the description should provide a brief overview of its content and purpose. The title and description should be clear, informative, and engaging to users.
The title should be no more than 10 words, and the description should be 1-3 sentences long. The title and description should not reveal that they come from a chat history. The title and description should be relevant to the content of the subindex and should not contain any personal information or sensitive data.

Your output MUST be a valid JSON object in the following format:

{
  "title": "Generated title here",
  "description": "Generated description here"
}"""

DETAILS_USER_PROMPT = """Here is the chat history used to create the index:

{chat_history}

Generate a suitable title and a 1-3 sentence description, following the format specified above."""


def build_details_messages(chat_history: str) -> list[dict[str, str]]:
    """Build the system and user messages for details generation."""
    return [
        {"role": "system", "content": DETAILS_SYSTEM_PROMPT},
        {"role": "user", "content": DETAILS_USER_PROMPT.format(chat_history=chat_history)},
    ]
