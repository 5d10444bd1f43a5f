"""
Stage 3: chairman synthesis of the final answer.
"""

from pathlib import Path
from typing import Optional

from .artifacts import (
    extract_user_query,
    final_answer_path,
    load_stage1_answers,
    load_stage2_reviews,
    write_artifact,
)
from .emit import emit
from .errors import ArtifactNotFoundError, StageError
from .models import LLMRunner
from .parsing import engine_file_token, normalize_engine, preview_text
from .prompts import build_chairman_prompt
from .schemas import FinalizeArguments, FinalizeResult
from .trail import generate_final_markdown
from .workspace import resolve_workspace
from ..config import CouncilConfig

FINAL_PREVIEW_CHARS = 300


async def finalize(
    args: FinalizeArguments,
    run_llm: LLMRunner,
    config: Optional[CouncilConfig] = None,
    cwd: Optional[Path] = None
) -> FinalizeResult:
    """
    Synthesize the final answer from all Stage1 answers and Stage2 reviews.

    Requires at least one peer review, so finalize can only run after
    ``council.peer_review``. Nothing is written when that check fails.
    """
    config = config or CouncilConfig()
    engine = normalize_engine(args.engine, config.default_engine)
    engine_token = engine_file_token(engine, config.default_engine)

    base_dir = resolve_workspace(args.title, cwd, config.council_dir, config.max_parent_levels)
    answers = load_stage1_answers(base_dir)
    reviews = load_stage2_reviews(base_dir)
    if not reviews:
        raise ArtifactNotFoundError("No Stage2 review files found. Please run peer_review first.")

    user_query = extract_user_query(base_dir)
    prompt = build_chairman_prompt(user_query, answers, reviews)

    emit({"type": "status", "stage": 3, "msg": f"Chairman ({engine}) synthesizing..."})
    try:
        final_output = await run_llm(engine, prompt)
    except Exception as e:
        raise StageError(f"Failed to run LLM CLI for finalization: {e}") from e

    markdown = generate_final_markdown(
        args.title, engine, user_query, len(answers), len(reviews), final_output
    )
    path = write_artifact(final_answer_path(base_dir, engine_token), markdown)
    emit({"type": "artifact_saved", "kind": "final answer", "stage": 3, "path": str(path)})

    return FinalizeResult(
        final_markdown_file=str(path),
        summary=(
            f"Final answer generated using {engine} based on "
            f"{len(answers)} responses and {len(reviews)} reviews"
        ),
        final_answer_preview=preview_text(final_output, FINAL_PREVIEW_CHARS),
        markdown=markdown
    )
