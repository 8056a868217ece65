"""Render a FastGPT answer and its references as Markdown-flavored text."""

from models.fastgpt import FastGPTResponse


def collapse_blank_lines(text: str) -> str:
    """
    Replace each "\\n\\n" with "\\n" in one left-to-right pass.

    Not idempotent: runs of four newlines come out as two. Downstream output
    depends on this exact behavior, so it is not normalized further.
    """
    return text.replace("\n\n", "\n")


def format_reference_line(index: int, title: str, link: str, snippet: str) -> str:
    # Two spaces before the second dash
    return f"{index}. {title} - {link}  - {snippet}\n"


def format_response(response: FastGPTResponse, query: str) -> str:
    """
    Build the printable answer.

    Args:
        response: Structured FastGPT answer
        query: The query as the user gave it, used verbatim in the heading

    Returns:
        "# {query}\\n{answer}\\n", followed by a "# References" block when the
        response cites any sources
    """
    answer = collapse_blank_lines(response.output)
    text = "# " + query + "\n" + answer + "\n"

    if not response.references:
        return text

    text += "\n# References\n"
    for index, ref in enumerate(response.references, start=1):
        text += format_reference_line(index, ref.title, ref.link, ref.snippet)
    return text
