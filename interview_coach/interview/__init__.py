"""
Interview module: question generation, session lifecycle and LLM feedback.
"""
