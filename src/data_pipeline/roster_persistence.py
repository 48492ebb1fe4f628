"""Allocation persistence - save and load team allocations to/from JSON files."""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from src.data_pipeline.config import ALLOCATIONS_DIR
from src.roster_engine.models import TeamAssignment

logger = logging.getLogger(__name__)

LATEST_LINK_NAME = "latest_allocation.json"


class RosterPersistence:
    """Handles saving and loading team allocations to/from JSON files."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = storage_dir or ALLOCATIONS_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def save_allocation(
        self,
        teams: Sequence[TeamAssignment],
        summary: Dict,
        competition_id: Optional[str] = None,
        allocation_id: Optional[str] = None,
    ) -> Path:
        """Save an allocation to a JSON file.

        Args:
            teams: Engine output to persist.
            summary: Balance summary from RosterBalancingEngine.summarize.
            competition_id: Competition the teams belong to.
            allocation_id: Reuse an id (e.g. when overwriting); a new UUID
                is generated when omitted.

        Returns:
            Path to the saved file.
        """
        allocation_id = allocation_id or str(uuid.uuid4())
        filepath = self._allocation_path(allocation_id)

        data = {
            "allocation_id": allocation_id,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "competition_id": competition_id,
            "team_count": len(teams),
            "player_count": sum(t.member_count for t in teams),
            "summary": summary,
            "teams": [t.to_dict() for t in teams],
        }

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        self._update_latest_link(filepath)

        logger.info(
            "Saved allocation %s (%d teams, %d players) to %s",
            allocation_id, data["team_count"], data["player_count"], filepath,
        )
        return filepath

    def load_allocation(self, allocation_id: str) -> Optional[List[TeamAssignment]]:
        """Load the teams of a saved allocation.

        Returns:
            List of TeamAssignment if found and readable, None otherwise.
        """
        data = self._read(self._allocation_path(allocation_id))
        if data is None:
            return None

        logger.info("Loaded allocation %s", allocation_id)
        return [TeamAssignment.from_dict(t) for t in data["teams"]]

    def load_latest_allocation(self) -> Optional[List[TeamAssignment]]:
        """Load the most recently saved allocation, if any."""
        latest_link = self.storage_dir / LATEST_LINK_NAME

        if not latest_link.is_symlink():
            return None

        actual_file = latest_link.resolve()
        if not actual_file.exists():
            logger.warning(
                "Latest allocation symlink points to missing file: %s", actual_file
            )
            return None

        data = self._read(actual_file)
        if data is None:
            return None
        return [TeamAssignment.from_dict(t) for t in data["teams"]]

    def list_saved_allocations(self) -> List[Dict]:
        """List all saved allocations with metadata.

        Returns:
            List of dicts with allocation_id, generated_at, competition_id,
            team_count, player_count. Most recent first.
        """
        allocations = []

        for filepath in self.storage_dir.glob("allocation_*.json"):
            if filepath.is_symlink():
                continue

            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)

                allocations.append(
                    {
                        "allocation_id": data["allocation_id"],
                        "generated_at": data["generated_at"],
                        "competition_id": data.get("competition_id"),
                        "team_count": data.get("team_count", 0),
                        "player_count": data.get("player_count", 0),
                    }
                )
            except (json.JSONDecodeError, OSError, KeyError, TypeError) as e:
                logger.warning("Skipping corrupt allocation file %s: %s", filepath, e)
                continue

        return sorted(allocations, key=lambda x: x["generated_at"], reverse=True)

    def delete_allocation(self, allocation_id: str) -> bool:
        """Delete a saved allocation file.

        Returns:
            True if deleted, False if not found.
        """
        filepath = self._allocation_path(allocation_id)

        if not filepath.exists():
            return False

        latest_link = self.storage_dir / LATEST_LINK_NAME
        if latest_link.is_symlink() and latest_link.resolve() == filepath.resolve():
            latest_link.unlink()

        filepath.unlink()
        logger.info("Deleted allocation %s", allocation_id)
        return True

    def _allocation_path(self, allocation_id: str) -> Path:
        return self.storage_dir / f"allocation_{allocation_id}.json"

    @staticmethod
    def _read(filepath: Path) -> Optional[Dict]:
        if not filepath.exists():
            logger.warning("Allocation file not found: %s", filepath)
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt allocation file %s: %s", filepath, e)
            return None

    def _update_latest_link(self, filepath: Path):
        """Point the latest symlink at *filepath*."""
        latest_link = self.storage_dir / LATEST_LINK_NAME

        if latest_link.exists() or latest_link.is_symlink():
            latest_link.unlink()

        latest_link.symlink_to(filepath.name)
