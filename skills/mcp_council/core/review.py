"""
Stage 2: peer review of the Stage1 answers.

One engine ranks every other model's answer anonymously. The answers are
relabeled "Response A", "Response B", ... after the reviewer's own answer
(``self_model``) has been dropped, so labels never leave a gap.
"""

from pathlib import Path
from typing import Optional

from .artifacts import extract_user_query, load_stage1_answers, review_path, write_artifact
from .emit import emit
from .errors import ArtifactNotFoundError, StageError
from .migration import migrate_legacy_reviews
from .models import LLMRunner
from .parsing import engine_file_token, exclude_self_model, label_answers, normalize_engine, preview_text
from .prompts import build_ranking_prompt
from .schemas import PeerReviewArguments, PeerReviewResult
from .trail import generate_review_markdown
from .workspace import resolve_workspace
from ..config import CouncilConfig

REVIEW_PREVIEW_CHARS = 200


async def peer_review(
    args: PeerReviewArguments,
    run_llm: LLMRunner,
    config: Optional[CouncilConfig] = None,
    cwd: Optional[Path] = None
) -> PeerReviewResult:
    """
    Conduct peer review of the Stage1 answers in ``.council/<title>``.

    Args:
        args: Validated tool arguments
        run_llm: Collaborator invoked once with (engine, prompt)
        config: Server configuration (defaults when None)
        cwd: Directory the workspace search starts from

    Returns:
        PeerReviewResult describing the written ``peer-review-by-<engine>.md``
    """
    config = config or CouncilConfig()
    engine = normalize_engine(args.engine, config.default_engine)
    engine_token = engine_file_token(engine, config.default_engine)

    base_dir = resolve_workspace(args.title, cwd, config.council_dir, config.max_parent_levels)
    answers = load_stage1_answers(base_dir)

    answers, skipped = exclude_self_model(answers, args.self_model)
    for answer in skipped:
        emit({"type": "self_model_skipped", "model": answer.model, "file": answer.path.name if answer.path else None})
    if not answers:
        raise ArtifactNotFoundError("No Stage1 answers available after applying self_model exclusion")

    labeled = label_answers(answers)
    user_query = extract_user_query(base_dir)
    prompt = build_ranking_prompt(user_query, labeled)

    emit({"type": "status", "stage": 2, "msg": f"Peer review of {len(labeled)} answers by {engine}..."})
    try:
        review_output = await run_llm(engine, prompt)
    except Exception as e:
        raise StageError(f"Failed to run LLM CLI for peer review: {e}") from e

    migrate_legacy_reviews(base_dir, engine_token)

    markdown = generate_review_markdown(args.title, engine, user_query, labeled, review_output)
    path = write_artifact(review_path(base_dir, engine_token), markdown)
    emit({"type": "artifact_saved", "kind": "peer review", "stage": 2, "path": str(path)})

    return PeerReviewResult(
        review_markdown_file=str(path),
        summary=f"Peer review completed for {len(labeled)} answers using {engine}",
        review_preview=preview_text(review_output, REVIEW_PREVIEW_CHARS),
        markdown=markdown
    )
