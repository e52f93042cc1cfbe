"""
Command-line runner for batch compatibility scoring.

Scores a pool of candidate profiles for one viewer and writes the ranking.

Usage:
    python -m matchscore.run --viewer viewer.json --candidates candidates.json

The runner performs the following steps:
1. Load and validate configuration
2. Load viewer and candidate profiles
3. Rank candidates (or select daily matches with --daily)
4. Log the top explanations
5. Save the ranking CSV and, optionally, an evaluation report
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Dict, Any, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_scoring(
    config_path: str,
    viewer_path: str,
    candidates_path: str,
    output_path: Optional[str] = None,
    report_path: Optional[str] = None,
    top_k: Optional[int] = None,
    daily: bool = False,
    n_jobs: Optional[int] = None,
    today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Rank candidates for a viewer.

    Args:
        config_path: Path to the configuration YAML file
        viewer_path: Path to the viewer profile (JSON/YAML)
        candidates_path: Path to the candidate profiles (JSON/YAML)
        output_path: Where to write the ranking CSV (defaults under output.dir)
        report_path: If provided, write an evaluation report JSON here
        top_k: Keep only the top_k candidates (ignored with daily)
        daily: Apply eligibility rules and the daily limit
        n_jobs: Worker threads (overrides ranking.n_jobs)
        today: Evaluation date (defaults to the current date)

    Returns:
        Dictionary with success flag, row count and artifact paths
    """
    from .configs import load_config, validate_config, get_config_value
    from .data_loading import load_profile, load_profiles
    from .scoring import create_scorer_from_config
    from .ranking import rank_candidates, get_daily_matches
    from .evaluation import create_evaluation_report

    config = load_config(config_path)
    issues = validate_config(config)
    if issues:
        for issue in issues:
            logger.warning(f"Config issue: {issue}")

    setup_logging(get_config_value(config, "global.log_level", "INFO"))

    scorer = create_scorer_from_config(config)
    effective_jobs = n_jobs if n_jobs is not None else get_config_value(config, "ranking.n_jobs", 1)
    today = today or date.today()

    viewer = load_profile(viewer_path)
    candidates = load_profiles(candidates_path)

    if daily:
        limit = get_config_value(config, "ranking.daily_limit", 10)
        logger.info(f"Selecting up to {limit} daily matches for {viewer.profile_id}")
        ranked = get_daily_matches(
            viewer, candidates, limit=limit, scorer=scorer, today=today, n_jobs=effective_jobs
        )
    else:
        ranked = rank_candidates(
            viewer, candidates, scorer=scorer, today=today, n_jobs=effective_jobs, top_k=top_k
        )

    for _, row in ranked.head(5).iterrows():
        logger.info(f"  {row['profile_id']}: {row['explanation']}")

    output_dir = Path(get_config_value(config, "output.dir", "artifacts"))
    out = Path(output_path) if output_path else output_dir / f"ranking_{viewer.profile_id}.csv"
    out.parent.mkdir(parents=True, exist_ok=True)
    to_save = ranked.copy()
    to_save["reasons"] = to_save["reasons"].apply(lambda r: "; ".join(r))
    to_save.to_csv(out, index=False)
    logger.info(f"Saved {len(ranked)} ranked candidates to {out}")

    result: Dict[str, Any] = {
        "success": True,
        "viewer": viewer.profile_id,
        "n_ranked": len(ranked),
        "output_path": str(out),
    }

    if report_path and len(ranked) > 0:
        report = create_evaluation_report(
            viewer.profile_id,
            ranked,
            profiles=[viewer] + list(candidates),
            quantiles=get_config_value(config, "evaluation.quantiles", [0.1, 0.25, 0.5, 0.75, 0.9])
        )
        report.save(report_path)
        logger.info("\n" + report.summary())
        result["report_path"] = report_path

    return result


def main(argv=None):
    """Main entry point for batch scoring."""
    parser = argparse.ArgumentParser(
        description="Rank candidate profiles by compatibility with a viewer"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument("--viewer", type=str, required=True, help="Viewer profile file (JSON/YAML)")
    parser.add_argument("--candidates", type=str, required=True, help="Candidate profiles file (JSON/YAML)")
    parser.add_argument("--output", type=str, default=None, help="Ranking CSV path (overrides config)")
    parser.add_argument("--report", type=str, default=None, help="Write an evaluation report JSON here")
    parser.add_argument("--top-k", type=int, default=None, help="Keep only the best N candidates")
    parser.add_argument(
        "--daily",
        action="store_true",
        help="Apply eligibility rules and the configured daily limit"
    )
    parser.add_argument("--n-jobs", type=int, default=None, help="Worker threads (overrides config)")
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Evaluation date as YYYY-MM-DD (defaults to today)"
    )

    args = parser.parse_args(argv)

    try:
        result = run_scoring(
            args.config,
            args.viewer,
            args.candidates,
            output_path=args.output,
            report_path=args.report,
            top_k=args.top_k,
            daily=args.daily,
            n_jobs=args.n_jobs,
            today=args.today
        )
        if result["success"]:
            logger.info("Scoring completed successfully")
            return 0
        logger.error("Scoring failed")
        return 1
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Scoring failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
