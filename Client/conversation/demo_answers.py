"""Canned answers for the demo wiring, keyed by lower-cased question."""

DEMO_FALLBACK_ANSWER = "Mock LLM response: Images analyzed successfully."

DEMO_ANSWERS = {
    "are there any visible defects or issues?": "No issues were detected",
    "are there any visible defects?": "No issues were detected",
    "what is different between these images?": "The images show the same object from different angles; no meaningful differences were found.",
    "describe the images.": "Each image shows a product photographed against a plain background.",
}


def lookup_demo_answer(question: str) -> str:
    return DEMO_ANSWERS.get(question.strip().lower(), DEMO_FALLBACK_ANSWER)
