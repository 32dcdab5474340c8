from pydantic_ai import Agent
from pydantic_ai.models import Model


def get_completion_agent(model: Model, instructions: str | None = None) -> Agent[None, str]:
    return Agent(
        model,
        output_type=str,
        instructions=instructions,
    )


def get_transcription_agent(model: Model) -> Agent[None, str]:
    return Agent(
        model,
        output_type=str,
        instructions="""
        You read text from photos of school material: vocabulary sheets,
        textbook pages and handwritten notes.
        Follow the formatting rules of the request exactly.
        Never add commentary, greetings or explanations around the answer.
        """,
    )
