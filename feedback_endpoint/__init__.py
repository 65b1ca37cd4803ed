"""Learner feedback endpoint backed by the OpenAI Responses API."""
