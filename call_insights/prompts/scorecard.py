"""
Prompt for scoring a single sales call transcript.

The model is asked for one JSON object whose keys match the analysis columns
of sales_calls. Literal braces in the template are doubled for str.format.
"""

SCORECARD_PROMPT = """You are an expert sales call analyst for an education company that sells test preparation courses.
Analyze this sales call transcript and provide a comprehensive analysis.

## TRANSCRIPT
{transcript}

## RESPONSE FORMAT
Respond with a single JSON object matching this structure exactly:
```json
{{
  "conversion_likelihood": "high" | "medium" | "low",
  "conversion_score": number (0-100),
  "total_duration_minutes": number (estimated from transcript),
  "sales_rep_talk_ratio": number (percentage 0-100),
  "customer_talk_ratio": number (percentage 0-100),
  "sentiment_score": number (-100 to +100),
  "engagement_score": number (0-100),
  "key_insights": {{
    "main_pain_points": [string],
    "customer_objections": [string],
    "sales_rep_strengths": [string],
    "sales_rep_weaknesses": [string],
    "decisive_moments": [string],
    "missed_opportunities": [string]
  }},
  "statistical_data": {{
    "question_count": number,
    "objection_count": number,
    "positive_indicators": number,
    "negative_indicators": number,
    "urgency_mentions": number,
    "price_discussions": number,
    "competitor_mentions": number
  }},
  "improvement_suggestions": [
    {{
      "area": string,
      "suggestion": string,
      "impact": "high" | "medium" | "low",
      "implementation_difficulty": "easy" | "medium" | "hard"
    }}
  ],
  "customer_demographics": {{
    "experience_level": "beginner" | "intermediate" | "advanced",
    "urgency_level": "high" | "medium" | "low",
    "budget_indicators": "high" | "medium" | "low" | "unclear",
    "decision_making_authority": "high" | "medium" | "low" | "unclear",
    "geographic_indicators": string,
    "industry_background": string
  }},
  "sales_rep_performance": {{
    "rapport_building": number (1-10),
    "needs_discovery": number (1-10),
    "objection_handling": number (1-10),
    "closing_techniques": number (1-10),
    "product_knowledge": number (1-10),
    "listening_skills": number (1-10),
    "overall_performance": number (1-10)
  }}
}}
```

Base your analysis on:
1. Conversation flow and structure
2. Customer engagement indicators
3. Sales rep techniques and effectiveness
4. Pain point identification and resolution
5. Objection handling quality
6. Closing attempts and customer responses
7. Overall conversation sentiment and momentum

Provide specific, actionable insights that can help improve conversion rates.
"""


def build_scorecard_prompt(transcript: str) -> str:
    """Render the scorecard prompt for one transcript."""
    return SCORECARD_PROMPT.format(transcript=transcript)
