"""
Templates for response feedback and the overall interview summary.
"""

FEEDBACK_TEMPLATES = {
    # ── Feedback for one question/response pair ─────────────
    "question_feedback": """Question: {question}

Response: {response}

Please analyze this interview response and provide detailed feedback.
Format your response as a JSON object with the following structure:
{{
  "feedbackItems": [
    {{
      "category": "content|delivery|language|confidence",
      "sentiment": "positive|negative|neutral",
      "content": "Detailed feedback about the response"
    }}
  ],
  "suggestions": [
    {{
      "category": "content|delivery|language|confidence",
      "content": "Specific suggestion for improvement"
    }}
  ]
}}
Use exactly one of the listed values for every "category" and "sentiment" field.
Return ONLY the JSON object.""",

    # ── Narrative summary of a whole session ────────────────
    "overall_summary": """I've analyzed an interview with {question_count} questions and {response_count} responses.
The candidate received positive feedback on: {strengths}
Areas for improvement include: {weaknesses}
The overall score is {overall_score}/100.

Please generate a concise, personalized summary of this interview performance.""",

    # ── Deterministic summary when no LLM is configured ─────
    "overall_summary_offline": (
        "You completed {response_count} out of {question_count} questions with an overall "
        "score of {overall_score}/100. Focus on improving the areas highlighted in your feedback."
    ),
}

FEEDBACK_SYSTEM_PROMPTS = {
    "question_feedback": "You are an AI assistant that provides detailed feedback on interview responses.",
    "overall_summary": "You are an AI assistant that provides constructive feedback on interview performance.",
}
