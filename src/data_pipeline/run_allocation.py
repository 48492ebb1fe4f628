"""Form (or rebalance) competition teams from registration exports.

Usage:
    python -m src.data_pipeline.run_allocation --teams N [data_dir]
    python -m src.data_pipeline.run_allocation --rebalance ALLOCATION_ID [data_dir]

Examples:
    python -m src.data_pipeline.run_allocation --teams 4
    python -m src.data_pipeline.run_allocation --teams 6 data/raw/spring-cup
    python -m src.data_pipeline.run_allocation --rebalance 3f2c... data/raw/spring-cup
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.data_pipeline.cleaning import DataCleaner
from src.data_pipeline.config import ALLOCATIONS_DIR, RAW_DATA_DIR
from src.data_pipeline.ingestion import RegistrationIngester
from src.data_pipeline.roster_persistence import RosterPersistence
from src.data_pipeline.transformation import SnapshotBuilder
from src.logging_config import setup_logging
from src.roster_engine.balancing_engine import RosterBalancingEngine
from src.roster_engine.models import PlayerRecord

logger = logging.getLogger(__name__)


def load_snapshot(data_dir: Path) -> List[PlayerRecord]:
    """Read, clean and assemble one competition's player snapshot.

    Raises:
        FileNotFoundError: If the data directory doesn't exist.
        IngestionError: If a required export cannot be read.
    """
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    logger.info("Step 1/3: Ingesting CSV files from %s...", data_dir)
    raw = RegistrationIngester(data_dir).read_all()
    logger.info(
        "Loaded: %d players, %d self scores, %d peer ratings, %d captain votes",
        len(raw["players"]), len(raw["self_scores"]),
        len(raw["peer_ratings"]), len(raw["captain_votes"]),
    )

    logger.info("Step 2/3: Cleaning data...")
    cleaned = DataCleaner().clean_all(raw)

    logger.info("Step 3/3: Building player snapshot...")
    return SnapshotBuilder().build(cleaned)


def run_allocation(
    team_count: Optional[int] = None,
    data_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    competition_id: Optional[str] = None,
    rebalance_id: Optional[str] = None,
) -> Path:
    """Run the full allocation: snapshot -> engine -> JSON output.

    Args:
        team_count: Number of teams to form. Ignored when rebalancing.
        data_dir: Directory containing the CSV exports.
            Defaults to ``data/raw/``.
        output_dir: Directory for allocation JSON files.
            Defaults to ``data/allocations/``.
        competition_id: Recorded with the output and used as team id
            prefix. Defaults to the data directory name.
        rebalance_id: Saved allocation whose teams should be redrawn
            around their captains instead of forming new teams.

    Returns:
        Path to the saved allocation file.

    Raises:
        FileNotFoundError: If the data directory or allocation is missing.
        ValueError: If neither team_count nor rebalance_id is given.
        AllocationError: If the engine rejects the request.
    """
    data_dir = Path(data_dir) if data_dir is not None else RAW_DATA_DIR
    output_dir = Path(output_dir) if output_dir is not None else ALLOCATIONS_DIR
    competition_id = competition_id or data_dir.name

    if team_count is None and rebalance_id is None:
        raise ValueError("Either team_count or rebalance_id is required")

    players = load_snapshot(data_dir)
    persistence = RosterPersistence(output_dir)
    engine = RosterBalancingEngine(id_prefix=f"{competition_id}-")

    if rebalance_id is not None:
        rosters = persistence.load_allocation(rebalance_id)
        if rosters is None:
            raise FileNotFoundError(f"Allocation not found: {rebalance_id}")
        teams = engine.rebalance_teams(players, rosters)
    else:
        teams = engine.form_teams(players, team_count)

    summary = engine.summarize(teams)
    output_file = persistence.save_allocation(
        teams,
        summary,
        competition_id=competition_id,
        allocation_id=rebalance_id,
    )

    logger.info("Allocation complete! Output: %s", output_file)
    for team in teams:
        logger.info(
            "  %s: %d players, captain %s, average %d",
            team.name, team.member_count, team.captain_id, team.average_score,
        )
    logger.info(
        "  Team averages range %d-%d (spread %d)",
        summary["lowest_average"], summary["highest_average"], summary["spread"],
    )

    return output_file


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Split registered players into skill-balanced teams"
    )
    parser.add_argument(
        "data_dir",
        nargs="?",
        type=Path,
        help="Directory with players.csv and optional score/vote exports "
             "(default: data/raw/)",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--teams", type=int, help="Number of teams to form")
    mode.add_argument(
        "--rebalance",
        metavar="ALLOCATION_ID",
        help="Redraw a saved allocation around its captains",
    )
    parser.add_argument("--competition-id", help="Defaults to the data directory name")
    parser.add_argument("--output-dir", type=Path, help="Default: data/allocations/")
    parser.add_argument("--log-level", default="INFO")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        output = run_allocation(
            team_count=args.teams,
            data_dir=args.data_dir,
            output_dir=args.output_dir,
            competition_id=args.competition_id,
            rebalance_id=args.rebalance,
        )
        print(f"Allocation complete: {output}")
    except Exception:
        logger.exception("Allocation failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
