"""Prompt templates sent to the language model."""

from call_insights.prompts.scorecard import build_scorecard_prompt
from call_insights.prompts.comparison import build_comparison_prompt

__all__ = ['build_scorecard_prompt', 'build_comparison_prompt']
