"""CSV exporter for VBD draft boards"""
import csv
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from src.core.models import BoardEntry, TierBreak
from config import OUTPUT_DIR


logger = logging.getLogger(__name__)


class CSVExporter:
    """Export draft boards to CSV format"""

    BOARD_FIELDS = [
        'Rank', 'Player', 'Pos', 'Team', 'ADP', 'Pos Rank', 'Tier', 'VBD',
        'Raw Pts', 'SOS', 'Adj Pts', 'Floor', 'Repl Pts', 'Warning', 'Drafted'
    ]

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or OUTPUT_DIR
        self.output_dir.mkdir(parents=True, exist_ok=True)

        # Most recent exports
        self.latest_dir = self.output_dir / 'latest'
        self.latest_dir.mkdir(exist_ok=True)

        # Timestamped exports
        self.archive_dir = self.output_dir / 'archive'
        self.archive_dir.mkdir(exist_ok=True)

    def _get_export_dir(self) -> Tuple[Path, str]:
        """Get directory for current export with timestamp"""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        export_dir = self.archive_dir / timestamp
        export_dir.mkdir(exist_ok=True)
        return export_dir, timestamp

    def _copy_to_latest(self, source_file: Path, filename: str) -> None:
        """Copy file to latest directory"""
        shutil.copy2(source_file, self.latest_dir / filename)

    def export_board(self, board: Sequence[BoardEntry], export_dir: Path, timestamp: str) -> Path:
        """Export the full board with every VBD component"""
        filepath = export_dir / f"draft_board_{timestamp}.csv"

        with open(filepath, 'w', newline='') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=self.BOARD_FIELDS)
            writer.writeheader()

            for i, entry in enumerate(board, 1):
                b = entry.breakdown
                writer.writerow({
                    'Rank': i,
                    'Player': entry.player.name,
                    'Pos': entry.position.value,
                    'Team': entry.player.team or '',
                    'ADP': f"{entry.adp:.1f}",
                    'Pos Rank': f"{entry.position.value}{b.position_rank}" if b.position_rank else '',
                    'Tier': entry.tier if entry.tier is not None else '',
                    'VBD': f"{entry.vbd:.1f}",
                    'Raw Pts': f"{b.raw_points:.1f}",
                    'SOS': f"{b.sos_multiplier:.3f}",
                    'Adj Pts': f"{b.adjusted_points:.1f}",
                    'Floor': 'Y' if b.floor_applied else '',
                    'Repl Pts': f"{b.replacement_points:.1f}",
                    'Warning': entry.dead_zone_warning or '',
                    'Drafted': ''  # For marking picks on draft day
                })

        self._copy_to_latest(filepath, 'draft_board.csv')
        logger.info(f"Exported {len(board)} board entries")
        return filepath

    def export_tier_breaks(self, board: Sequence[BoardEntry], breaks: Sequence[TierBreak],
                           export_dir: Path, timestamp: str) -> Path:
        """Export where each tier ends and why"""
        filepath = export_dir / f"tier_breaks_{timestamp}.csv"

        with open(filepath, 'w', newline='') as csvfile:
            fieldnames = ['After', 'Next', 'VBD Drop', 'Pct Drop', 'Forced', 'Reason']
            writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
            writer.writeheader()

            for tier_break in breaks:
                index = tier_break.after_index
                writer.writerow({
                    'After': board[index].player.name if index < len(board) else '',
                    'Next': board[index + 1].player.name if index + 1 < len(board) else '',
                    'VBD Drop': f"{tier_break.vbd_drop:.1f}",
                    'Pct Drop': f"{tier_break.percent_drop * 100:.1f}",
                    'Forced': 'Y' if tier_break.forced else '',
                    'Reason': tier_break.reason
                })

        self._copy_to_latest(filepath, 'tier_breaks.csv')
        logger.info(f"Exported {len(breaks)} tier breaks")
        return filepath

    def cleanup_old_archives(self, keep_last: int = 5) -> None:
        """Clean up old archive directories, keeping only the most recent ones"""
        archive_dirs = sorted((d for d in self.archive_dir.iterdir() if d.is_dir()), reverse=True)

        for old_dir in archive_dirs[keep_last:]:
            try:
                shutil.rmtree(old_dir)
                logger.info(f"Removed old archive: {old_dir.name}")
            except OSError as e:
                logger.warning(f"Could not remove {old_dir}: {e}")

    def export_all(self, board: Sequence[BoardEntry],
                   breaks: Optional[Sequence[TierBreak]] = None) -> Dict[str, Path]:
        """Export the board (and tier breaks if given) to a fresh archive folder"""
        export_dir, timestamp = self._get_export_dir()

        exported = {'board': self.export_board(board, export_dir, timestamp)}
        if breaks is not None:
            exported['tier_breaks'] = self.export_tier_breaks(board, breaks, export_dir, timestamp)

        self.cleanup_old_archives()

        logger.info(f"Draft board exported to {export_dir}")
        return exported
