"""
Templates for generating interview questions from a candidate's documents,
and for analysing an uploaded document.
"""

QUESTION_GENERATION_TEMPLATES = {
    "question_generation": """Generate interview questions based on the following information:

{document_context}
Please generate {count} interview questions that are relevant to the candidate's experience and the job requirements. {hints}
Format the output as a JSON array of objects with the following properties: text, category, difficulty, source.
- difficulty is one of: easy, medium, hard
- source is one of: cv, jobSpec, general
Return ONLY the JSON array.""",

    "document_analysis": """Please analyze this {document_label} and extract key information:

{content}""",
}

QUESTION_GENERATION_SYSTEM_PROMPTS = {
    "question_generation": (
        "You are an AI assistant that helps generate relevant interview questions "
        "based on a candidate's CV and job specifications."
    ),
    "document_analysis": (
        "You are an AI assistant that helps analyze {document_label_plural} for interview preparation."
    ),
}
