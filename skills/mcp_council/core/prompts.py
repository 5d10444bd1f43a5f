"""
Prompt builders for the review and synthesis stages.

Both prompts are plain templates: the question, the artifacts, and fixed
instructions. The ranking prompt only ever shows anonymous labels.
"""

from typing import List

from .models import LabeledAnswer, Stage1Answer, Stage2Review

RANKING_PROMPT = """You are evaluating different responses to the following question:

Question: {query}

Here are the responses from different models (anonymized):

{responses}

Your task:
1. First, evaluate each response individually. For each response, explain what it does well and what it does poorly.
2. Then, at the very end of your response, provide a final ranking.

IMPORTANT: Your final ranking MUST be formatted EXACTLY as follows:
- Start with the line "FINAL RANKING:" (all caps, with colon)
- Then list the responses from best to worst as a numbered list
- Each line should be: number, period, space, then ONLY the response label (e.g., "1. Response A")
- Do not add any other text or explanations in the ranking section

Example of the correct format for your ENTIRE response:

Response A provides good detail on X but misses Y...
Response B is accurate but lacks depth on Z...
Response C offers the most comprehensive answer...

FINAL RANKING:
1. Response C
2. Response A
3. Response B

Now provide your evaluation and ranking:"""

CHAIRMAN_PROMPT = """You are the Chairman of an LLM Council. Multiple AI models have provided responses to a user's question, and then ranked each other's responses.

Original Question: {query}

STAGE 1 - Individual Responses:
{stage1}

STAGE 2 - Peer Rankings:
{stage2}

Your task as Chairman is to synthesize all of this information into a single, comprehensive, accurate answer to the user's original question. Consider:
- The individual responses and their insights
- The peer rankings and what they reveal about response quality
- Any patterns of agreement or disagreement

Provide a clear, well-reasoned final answer that represents the council's collective wisdom:"""


def format_labeled_responses(labeled: List[LabeledAnswer]) -> str:
    """``Response A:\\n<text>`` blocks separated by blank lines."""
    return "\n\n".join(f"{item.label}:\n{item.answer.response}" for item in labeled)


def build_ranking_prompt(query: str, labeled: List[LabeledAnswer]) -> str:
    """Build the Stage2 prompt asking an engine to rank anonymized answers."""
    return RANKING_PROMPT.format(query=query, responses=format_labeled_responses(labeled))


def build_chairman_prompt(query: str, answers: List[Stage1Answer], reviews: List[Stage2Review]) -> str:
    """Build the Stage3 prompt asking the chairman to synthesize a final answer."""
    stage1 = "\n\n".join(f"Model: {a.model}\nResponse: {a.response}" for a in answers)
    stage2 = "\n\n".join(f"Model: {r.engine}\nRanking: {r.review}" for r in reviews)
    return CHAIRMAN_PROMPT.format(query=query, stage1=stage1, stage2=stage2)
